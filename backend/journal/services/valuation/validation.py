# backend/journal/services/valuation/validation.py
"""
Input coercion and validation for the trade valuation engine.

Form input arrives loosely typed (strings, floats, Decimals, blanks). This
module turns it into checked Decimals or a TradeValidationIssue:

- Required numbers (entry_price, exit_price, position_size) must be present,
  numeric, finite and > 0, otherwise MISSING_FIELD.
- Optional numbers (stop_loss, take_profit, risk_percent) may be absent, but
  when supplied follow the same rules.
- When both stop_loss and take_profit are supplied they must bracket the
  entry price in the direction of the trade, otherwise BRACKET_INVALID:
      LONG:  stop_loss < entry_price < take_profit
      SHORT: take_profit < entry_price < stop_loss
  The comparison is exact. There is no tolerance.

Nothing in this module raises for bad input.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from journal.models import TradeDirection
from journal.services.constants import ZERO
from journal.services.valuation.types import (
    TradeInputs,
    TradeValidationIssue,
    ValuationIssueKind,
)

# Form values accepted for each direction
_DIRECTION_ALIASES: dict[str, TradeDirection] = {
    "long": TradeDirection.LONG,
    "buy": TradeDirection.LONG,
    "short": TradeDirection.SHORT,
    "sell": TradeDirection.SHORT,
}

_REQUIRED_FIELDS = ("entry_price", "exit_price", "position_size")
_OPTIONAL_FIELDS = ("stop_loss", "take_profit", "risk_percent")


@dataclass(frozen=True)
class CheckedInputs:
    """Trade inputs after coercion and validation."""

    direction: TradeDirection
    entry_price: Decimal
    exit_price: Decimal
    position_size: Decimal
    stop_loss: Decimal | None
    take_profit: Decimal | None
    risk_percent: Decimal | None


# =============================================================================
# COERCION HELPERS
# =============================================================================

def is_blank(value: Any) -> bool:
    """True for values a form sends when a field is left empty."""
    return value is None or (isinstance(value, str) and value.strip() == "")


def to_decimal(value: Any) -> Decimal | None:
    """
    Convert a loosely typed value to a finite Decimal.

    Floats go through str() so 0.1 becomes Decimal("0.1"), not its binary
    expansion.

    Returns:
        The Decimal, or None if the value is not a finite number
    """
    if isinstance(value, bool):
        return None
    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, int):
            result = Decimal(value)
        elif isinstance(value, float):
            result = Decimal(str(value))
        elif isinstance(value, str):
            result = Decimal(value.strip())
        else:
            return None
    except (InvalidOperation, ValueError):
        return None

    if not result.is_finite():
        return None
    return result


def to_direction(value: Any) -> TradeDirection | None:
    """Resolve a direction enum, accepting the buy/sell form values."""
    if isinstance(value, TradeDirection):
        return value
    if isinstance(value, str):
        return _DIRECTION_ALIASES.get(value.strip().lower())
    return None


def _missing(field: str, message: str) -> TradeValidationIssue:
    return TradeValidationIssue(
        kind=ValuationIssueKind.MISSING_FIELD,
        message=message,
        field=field,
    )


def check_positive(
        field: str,
        value: Any,
        required: bool,
) -> tuple[Decimal | None, TradeValidationIssue | None]:
    """
    Coerce one numeric field and check it is a positive finite number.

    Args:
        field: Field name (used in the issue)
        value: Raw value
        required: Whether absence is an issue

    Returns:
        Tuple of (decimal_or_none, issue_or_none)
    """
    if is_blank(value):
        if required:
            return None, _missing(field, f"{field} is required")
        return None, None

    number = to_decimal(value)
    if number is None:
        return None, _missing(field, f"{field} must be a finite number")
    if number <= ZERO:
        return None, _missing(field, f"{field} must be greater than zero")
    return number, None


def check_bracket(
        direction: TradeDirection,
        entry_price: Decimal,
        stop_loss: Decimal | None,
        take_profit: Decimal | None,
) -> TradeValidationIssue | None:
    """
    Check that stop and target bracket the entry for the trade direction.

    Only applies when both stop_loss and take_profit are present.
    """
    if stop_loss is None or take_profit is None:
        return None

    if direction is TradeDirection.LONG:
        if stop_loss < entry_price < take_profit:
            return None
        message = "For long trades: stop_loss < entry_price < take_profit"
    else:
        if take_profit < entry_price < stop_loss:
            return None
        message = "For short trades: take_profit < entry_price < stop_loss"

    return TradeValidationIssue(
        kind=ValuationIssueKind.BRACKET_INVALID,
        message=message,
        field=None,
    )


# =============================================================================
# ENTRY POINTS
# =============================================================================

def check_inputs(inputs: TradeInputs) -> CheckedInputs | TradeValidationIssue:
    """
    Coerce and validate all trade inputs.

    Fields are checked in a fixed order (direction, required numbers,
    optional numbers, bracket) and the first issue found is returned.
    """
    direction = to_direction(inputs.direction)
    if direction is None:
        return _missing("direction", "direction must be 'long' or 'short'")

    values: dict[str, Decimal | None] = {}
    for name in _REQUIRED_FIELDS:
        number, issue = check_positive(name, getattr(inputs, name), required=True)
        if issue is not None:
            return issue
        values[name] = number

    for name in _OPTIONAL_FIELDS:
        number, issue = check_positive(name, getattr(inputs, name), required=False)
        if issue is not None:
            return issue
        values[name] = number

    bracket_issue = check_bracket(
        direction,
        values["entry_price"],
        values["stop_loss"],
        values["take_profit"],
    )
    if bracket_issue is not None:
        return bracket_issue

    return CheckedInputs(direction=direction, **values)


def validate_trade(inputs: TradeInputs) -> TradeValidationIssue | None:
    """
    Validate trade inputs without valuing them.

    Used by forms to block submission. Returns None when the inputs are
    valid.
    """
    result = check_inputs(inputs)
    if isinstance(result, TradeValidationIssue):
        return result
    return None
