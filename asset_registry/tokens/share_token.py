"""Share token issuer: one fungible share unit per listed asset."""

import logging
import threading
from typing import Protocol

from asset_registry.exceptions import (
    AlreadyTokenizedError,
    AuthorizationError,
    InsufficientFundsError,
    InvalidParameterError,
    NotOwnerError,
    TokenNotFoundError,
)
from asset_registry.units import is_zero_address

logger = logging.getLogger(__name__)


class ShareIssuer(Protocol):
    """Calls the registry makes on the share token side."""

    address: str

    def tokenize_asset(self, caller: str, asset_id: int, uri: str) -> int:
        ...

    def mint_shares(self, caller: str, to: str, asset_id: int, amount: int) -> None:
        ...

    def burn_shares(self, caller: str, holder: str, asset_id: int, amount: int) -> None:
        ...

    def get_token_id(self, asset_id: int) -> int:
        ...

    def can_mint(self, caller: str) -> bool:
        ...


class ShareTokenIssuer:
    """Mints and burns share tokens, one token id per asset.

    Token ids come from a counter starting at 1 and are distinct from asset
    ids; ``0`` means "not tokenized". The binding is created once per asset
    and is queryable in both directions.

    Parameters
    ----------
    address : str
        Issuer address.
    owner : str
        Administrative owner.
    base_uri : str
        Prefix for token URIs that were not given an explicit URI.
    registry : str | None
        Address of the registry allowed to tokenize and mint.
    """

    def __init__(
        self,
        address: str,
        owner: str,
        base_uri: str = "",
        registry: str | None = None,
    ) -> None:
        if is_zero_address(address) or is_zero_address(owner):
            raise InvalidParameterError("Issuer and owner addresses cannot be zero")
        self.address = address
        self.owner = owner
        self.base_uri = base_uri
        self.registry = registry

        self._next_token_id = 1
        self._asset_to_token: dict[int, int] = {}
        self._token_to_asset: dict[int, int] = {}
        self._uris: dict[int, str] = {}
        self._balances: dict[int, dict[str, int]] = {}
        self._supply: dict[int, int] = {}
        self._operators: dict[str, set[str]] = {}
        self._lock = threading.RLock()

    # Administration

    def set_registry(self, caller: str, registry: str) -> None:
        """Point the issuer at the registry allowed to mint."""
        if caller != self.owner:
            raise NotOwnerError(f"{caller} is not the issuer owner")
        if is_zero_address(registry):
            raise InvalidParameterError("Registry address cannot be zero")
        self.registry = registry

    def set_approval_for_all(self, caller: str, operator: str, approved: bool) -> None:
        """Let ``operator`` burn on behalf of ``caller``."""
        if caller == operator:
            raise InvalidParameterError("Cannot set approval for self")
        with self._lock:
            operators = self._operators.setdefault(caller, set())
            if approved:
                operators.add(operator)
            else:
                operators.discard(operator)

    def is_approved_for_all(self, holder: str, operator: str) -> bool:
        return operator in self._operators.get(holder, set())

    # Binding

    def tokenize_asset(self, caller: str, asset_id: int, uri: str) -> int:
        """Bind ``asset_id`` to a fresh token id.

        Raises
        ------
        AlreadyTokenizedError
            If the asset is already bound.
        """
        self._require_minter(caller)
        with self._lock:
            if asset_id in self._asset_to_token:
                raise AlreadyTokenizedError(f"Asset {asset_id} is already tokenized")
            token_id = self._next_token_id
            self._next_token_id += 1
            self._asset_to_token[asset_id] = token_id
            self._token_to_asset[token_id] = asset_id
            if uri:
                self._uris[token_id] = uri
            self._balances[token_id] = {}
            self._supply[token_id] = 0
        logger.debug("Tokenized asset %d as token %d", asset_id, token_id)
        return token_id

    def get_token_id(self, asset_id: int) -> int:
        """Token id for an asset, or 0 when not tokenized."""
        return self._asset_to_token.get(asset_id, 0)

    def get_asset_id(self, token_id: int) -> int:
        """Asset id bound to ``token_id``."""
        if token_id not in self._token_to_asset:
            raise TokenNotFoundError(f"Token {token_id} does not exist")
        return self._token_to_asset[token_id]

    def uri(self, token_id: int) -> str:
        if token_id not in self._token_to_asset:
            raise TokenNotFoundError(f"Token {token_id} does not exist")
        return self._uris.get(token_id, f"{self.base_uri}{token_id}")

    # Balances

    def balance_of(self, holder: str, token_id: int) -> int:
        return self._balances.get(token_id, {}).get(holder, 0)

    def total_supply(self, token_id: int) -> int:
        return self._supply.get(token_id, 0)

    def mint_shares(self, caller: str, to: str, asset_id: int, amount: int) -> None:
        """Mint ``amount`` shares of ``asset_id`` to ``to``."""
        self._require_minter(caller)
        if is_zero_address(to):
            raise InvalidParameterError("Cannot mint to the zero address")
        if amount <= 0:
            raise InvalidParameterError("Amount must be greater than 0")
        with self._lock:
            token_id = self._require_token(asset_id)
            balances = self._balances[token_id]
            balances[to] = balances.get(to, 0) + amount
            self._supply[token_id] += amount
        logger.debug("Minted %d of token %d to %s", amount, token_id, to)

    def burn_shares(self, caller: str, holder: str, asset_id: int, amount: int) -> None:
        """Burn ``amount`` shares of ``asset_id`` held by ``holder``."""
        allowed = (
            caller in (self.registry, self.owner, holder)
            or self.is_approved_for_all(holder, caller)
        )
        if not allowed:
            raise AuthorizationError(f"{caller} may not burn shares of {holder}")
        if amount <= 0:
            raise InvalidParameterError("Amount must be greater than 0")
        with self._lock:
            token_id = self._require_token(asset_id)
            balance = self.balance_of(holder, token_id)
            if balance < amount:
                raise InsufficientFundsError(
                    f"Burn amount {amount} exceeds balance {balance} of {holder}"
                )
            self._balances[token_id][holder] = balance - amount
            self._supply[token_id] -= amount

    def can_mint(self, caller: str) -> bool:
        """True when ``caller`` may tokenize assets and mint shares."""
        return caller == self.owner or (self.registry is not None and caller == self.registry)

    def _require_minter(self, caller: str) -> None:
        if not self.can_mint(caller):
            raise AuthorizationError(f"{caller} is neither the registry nor the issuer owner")

    def _require_token(self, asset_id: int) -> int:
        token_id = self._asset_to_token.get(asset_id)
        if token_id is None:
            raise TokenNotFoundError(f"Asset {asset_id} is not tokenized")
        return token_id
