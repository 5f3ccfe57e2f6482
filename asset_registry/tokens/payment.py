"""Payment token interface and an in-memory reference implementation."""

import logging
import threading
from typing import Protocol, runtime_checkable

from asset_registry.exceptions import InsufficientFundsError, InvalidParameterError
from asset_registry.units import is_zero_address

logger = logging.getLogger(__name__)


@runtime_checkable
class PaymentToken(Protocol):
    """Fungible token used for every value transfer.

    The registry pulls payments with transfer-on-behalf and pays out or
    refunds from its own balance with ``transfer``. Balance and allowance
    reads pre-validate a buyer's funds.
    """

    address: str

    def transfer(self, sender: str, recipient: str, amount: int) -> bool:
        ...

    def transfer_from(self, spender: str, sender: str, recipient: str, amount: int) -> bool:
        ...

    def approve(self, owner: str, spender: str, amount: int) -> bool:
        ...

    def balance_of(self, account: str) -> int:
        ...

    def allowance(self, owner: str, spender: str) -> int:
        ...


class InMemoryPaymentToken:
    """Process-local fungible token with allowances.

    Mirrors the behavior of a standard fungible token closely enough for
    the registry: transfers on behalf of a holder consume allowance and
    fail with :class:`InsufficientFundsError` when balance or allowance is
    short.

    Parameters
    ----------
    address : str
        Token address.
    symbol : str
        Display symbol.
    decimals : int
        Fixed-point decimals (amounts are integers scaled by 10**decimals).
    """

    def __init__(self, address: str, symbol: str = "USDT", decimals: int = 18) -> None:
        if is_zero_address(address):
            raise InvalidParameterError("Token address cannot be zero")
        self.address = address
        self.symbol = symbol
        self.decimals = decimals
        self.total_supply = 0
        self._balances: dict[str, int] = {}
        self._allowances: dict[tuple[str, str], int] = {}
        self._lock = threading.Lock()

    def mint(self, to: str, amount: int) -> None:
        """Credit ``amount`` to ``to`` out of thin air (funding helper)."""
        if amount < 0:
            raise InvalidParameterError("Mint amount cannot be negative")
        with self._lock:
            self._balances[to] = self._balances.get(to, 0) + amount
            self.total_supply += amount

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    def approve(self, owner: str, spender: str, amount: int) -> bool:
        """Set ``spender``'s allowance over ``owner``'s balance."""
        if is_zero_address(spender):
            raise InvalidParameterError("Cannot approve the zero address")
        if amount < 0:
            raise InvalidParameterError("Allowance cannot be negative")
        with self._lock:
            self._allowances[(owner, spender)] = amount
        return True

    def transfer(self, sender: str, recipient: str, amount: int) -> bool:
        """Move ``amount`` from ``sender`` to ``recipient``."""
        with self._lock:
            self._move(sender, recipient, amount)
        return True

    def transfer_from(self, spender: str, sender: str, recipient: str, amount: int) -> bool:
        """Move ``amount`` from ``sender`` to ``recipient`` using ``spender``'s allowance."""
        with self._lock:
            allowed = self.allowance(sender, spender)
            if allowed < amount:
                raise InsufficientFundsError(
                    f"Transfer amount {amount} exceeds allowance {allowed} of {spender} over {sender}"
                )
            self._move(sender, recipient, amount)
            self._allowances[(sender, spender)] = allowed - amount
        return True

    def _move(self, sender: str, recipient: str, amount: int) -> None:
        if amount < 0:
            raise InvalidParameterError("Transfer amount cannot be negative")
        if is_zero_address(recipient):
            raise InvalidParameterError("Cannot transfer to the zero address")
        balance = self.balance_of(sender)
        if balance < amount:
            raise InsufficientFundsError(
                f"Transfer amount {amount} exceeds balance {balance} of {sender}"
            )
        self._balances[sender] = balance - amount
        self._balances[recipient] = self.balance_of(recipient) + amount
        logger.debug("%s transfer %s -> %s: %d", self.symbol, sender, recipient, amount)
