"""Fractional ownership ledger for a single asset."""

from dataclasses import dataclass, field

from asset_registry.units import WAD


@dataclass
class FractionalOwnership:
    """Share accounting for one asset.

    ``available_shares + sum(shares.values()) == total_shares`` holds after
    every mutation; ``owners`` lists each holder once, in order of first
    allocation.
    """

    total_shares: int
    available_shares: int
    share_price: int
    min_purchase: int
    max_per_owner: int  # 0 = unlimited
    owners: list[str] = field(default_factory=list)
    shares: dict[str, int] = field(default_factory=dict)

    def shares_of(self, owner: str) -> int:
        """Shares held by ``owner`` (0 if none)."""
        return self.shares.get(owner, 0)

    def percentage_of(self, owner: str) -> int:
        """Ownership fraction of ``owner`` in 18-decimal fixed point (1e18 = 100%)."""
        return self.shares_of(owner) * WAD // self.total_shares

    def allocate(self, owner: str, count: int) -> None:
        """Move ``count`` shares from the available pool to ``owner``.

        Callers validate limits first; this only keeps the books consistent.
        """
        if self.shares_of(owner) == 0 and owner not in self.owners:
            self.owners.append(owner)
        self.shares[owner] = self.shares_of(owner) + count
        self.available_shares -= count

    @property
    def allocated_shares(self) -> int:
        """Total shares held by owners."""
        return sum(self.shares.values())

    def is_consistent(self) -> bool:
        """Check the accounting invariant."""
        return (
            self.available_shares >= 0
            and self.available_shares + self.allocated_shares == self.total_shares
            and len(self.owners) == len(set(self.owners))
        )
