"""
Contract multiplier derivation.

Broker exports often report realized profit without the contract size. With
profit, prices and quantity known, the multiplier is the only unknown in

    profit = multiplier * price_diff * quantity + commission + fees

so it can be recovered exactly (up to the broker's own rounding of profit).
"""

import math
from dataclasses import dataclass
from typing import Optional

from ..config.import_config import DEFAULT_MAX_CONTRACT_MULTIPLIER, DEFAULT_MULTIPLIER_PRECISION
from ..logging import get_logger

logger = get_logger('import')

DEFAULT_MULTIPLIER: float = 1.0


@dataclass(frozen=True)
class MultiplierResult:
    """Derived multiplier and, when a fallback was used, the reason."""
    multiplier: float
    warning: Optional[str] = None

    @property
    def is_fallback(self) -> bool:
        return self.warning is not None


def calculate_contract_multiplier(
    profit: float,
    commission: Optional[float],
    fees: Optional[float],
    entry_price: float,
    exit_price: float,
    quantity: float,
    action: str,
    max_multiplier: float = DEFAULT_MAX_CONTRACT_MULTIPLIER,
    precision: int = DEFAULT_MULTIPLIER_PRECISION,
) -> MultiplierResult:
    """
    Back-calculate the contract multiplier from a realized profit figure.

    The reported profit already nets out commission and fees, so they are
    subtracted first. Values are used at full precision; only the final
    multiplier is rounded.

    Args:
        profit: Realized profit as reported by the broker
        commission: Commission (None treated as 0)
        fees: Other fees (None treated as 0)
        entry_price: Entry price
        exit_price: Exit price
        quantity: Traded quantity
        action: 'buy' or 'sell' (anything but 'buy' is priced as a sell)
        max_multiplier: Magnitude above which the result is rejected
        precision: Decimal places kept on the result

    Returns:
        MultiplierResult; never NaN or infinite. Every fallback carries a
        warning describing why the derived value was not used as-is.

    Example:
        >>> calculate_contract_multiplier(150, 5, 2, 100, 110, 10, 'buy').multiplier
        1.43
    """
    if quantity == 0:
        return MultiplierResult(DEFAULT_MULTIPLIER, 'Quantity is zero, cannot calculate multiplier')

    if entry_price == 0 or exit_price == 0:
        return MultiplierResult(
            DEFAULT_MULTIPLIER, 'Entry or exit price is zero, cannot calculate multiplier'
        )

    raw_pnl = profit - (commission or 0) - (fees or 0)

    if str(action).strip().lower() == 'buy':
        price_diff = exit_price - entry_price
    else:
        price_diff = entry_price - exit_price

    if price_diff == 0:
        return MultiplierResult(
            DEFAULT_MULTIPLIER, 'Price difference is zero, cannot calculate multiplier'
        )

    try:
        multiplier = raw_pnl / (price_diff * quantity)
    except (ZeroDivisionError, OverflowError):
        multiplier = math.nan

    logger.debug(
        f"Contract multiplier: raw_pnl={raw_pnl!r} price_diff={price_diff!r} "
        f"quantity={quantity!r} -> {multiplier!r}"
    )

    if not math.isfinite(multiplier):
        return MultiplierResult(DEFAULT_MULTIPLIER, 'Calculated multiplier is infinite or NaN')

    if multiplier <= 0:
        return MultiplierResult(
            round(abs(multiplier), precision), 'Calculated multiplier is negative or zero'
        )

    if abs(multiplier) > max_multiplier:
        return MultiplierResult(DEFAULT_MULTIPLIER, 'Calculated multiplier is unusually large')

    return MultiplierResult(round(multiplier, precision))
