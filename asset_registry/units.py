"""Fixed-point helpers for 18-decimal token amounts."""

from decimal import Decimal, localcontext

WAD = 10**18
BPS_DENOMINATOR = 10_000
MAX_PLATFORM_FEE_BPS = 3_000  # 30%

ZERO_ADDRESS = "0x" + "0" * 40


def to_wad(value: Decimal | str | int) -> int:
    """Convert a human amount (e.g. ``"500.5"``) to an 18-decimal integer.

    Parameters
    ----------
    value : Decimal | str | int
        Whole-unit amount.

    Returns
    -------
    int
        Amount scaled by 10**18, truncated toward zero.
    """
    amount = Decimal(str(value))
    with localcontext() as ctx:
        # Room for every integer digit plus the 18 fractional ones
        ctx.prec = max(ctx.prec, len(amount.as_tuple().digits) + 18)
        return int(amount.scaleb(18))


def from_wad(amount: int) -> Decimal:
    """Convert an 18-decimal integer back to a whole-unit ``Decimal``."""
    value = Decimal(amount)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(value.as_tuple().digits))
        return value / WAD


def fee_for(amount: int, fee_bps: int) -> int:
    """Platform fee on ``amount`` at ``fee_bps`` basis points, rounded down."""
    return amount * fee_bps // BPS_DENOMINATOR


def is_zero_address(address: str | None) -> bool:
    """True for ``None``, empty, or the all-zero address."""
    return not address or address.lower() == ZERO_ADDRESS
