# backend/journal/services/valuation/calculators.py
"""
Per-trade valuation calculators.

Each calculator follows the Single Responsibility Principle:
- PnLCalculator: Profit/loss in quote currency, secondary currency and percent
- RiskRewardCalculator: Bracket distances and reward/risk ratio
- PositionSizeCalculator: Lot size that risks a given percent of the balance

Design Principles:
- Stateless (configuration only, no per-call state)
- Operate on already-validated Decimals (see validation.py)
- No rounding: values are quantized only when presented
- Undefined metrics are returned as None, never NaN/Infinity

Usage:
    pnl_calc = PnLCalculator(config)
    pnl = pnl_calc.calculate(TradeDirection.LONG, entry, exit, size)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from journal.models import TradeDirection
from journal.services.constants import HUNDRED, ZERO
from journal.services.valuation.types import RiskRewardResult, ValuationConfig

logger = logging.getLogger(__name__)


def finite_or_none(value: Decimal | None) -> Decimal | None:
    """Normalize NaN/Infinity to None before a value leaves the engine."""
    if value is None or not value.is_finite():
        return None
    return value


# =============================================================================
# P&L CALCULATOR
# =============================================================================

@dataclass(frozen=True)
class PnLResult:
    """
    Profit/loss of one trade.

    Attributes:
        pnl_quote: P&L in quote currency
        pnl_secondary: pnl_quote converted at the fixed rate
        pnl_percent: pnl_quote / notional x 100
        notional: entry_price x position_size x contract_multiplier
    """

    pnl_quote: Decimal
    pnl_secondary: Decimal
    pnl_percent: Decimal
    notional: Decimal


class PnLCalculator:
    """
    Calculates realized P&L for a closed trade.

    Formulas:
        price_delta = exit - entry        (LONG)
                    = entry - exit        (SHORT)
        pnl_quote = price_delta x position_size x contract_multiplier
        pnl_secondary = pnl_quote x quote_to_secondary_rate
        pnl_percent = pnl_quote / notional x 100   (0 if notional is 0)

    Note:
        pnl_percent is relative to the position's notional, NOT to an account
        balance. The account balance is only used for position sizing.
    """

    def __init__(self, config: ValuationConfig) -> None:
        self._config = config

    def calculate(
            self,
            direction: TradeDirection,
            entry_price: Decimal,
            exit_price: Decimal,
            position_size: Decimal,
    ) -> PnLResult:
        if direction is TradeDirection.LONG:
            price_delta = exit_price - entry_price
        else:
            price_delta = entry_price - exit_price

        multiplier = self._config.contract_multiplier
        pnl_quote = price_delta * position_size * multiplier
        pnl_secondary = pnl_quote * self._config.quote_to_secondary_rate
        notional = entry_price * position_size * multiplier

        if notional != ZERO:
            pnl_percent = (pnl_quote / notional) * HUNDRED
        else:
            pnl_percent = ZERO

        return PnLResult(
            pnl_quote=pnl_quote,
            pnl_secondary=pnl_secondary,
            pnl_percent=pnl_percent,
            notional=notional,
        )


# =============================================================================
# RISK/REWARD CALCULATOR
# =============================================================================

class RiskRewardCalculator:
    """
    Calculates the planned risk/reward of a bracketed trade.

    Formulas:
        risk_distance = |entry - stop_loss|
        reward_distance = |take_profit - entry|
        ratio = reward_distance / risk_distance

    Direction-agnostic (absolute distances). A zero risk distance makes the
    ratio undefined and it is returned as None.
    """

    def calculate(
            self,
            entry_price: Decimal,
            stop_loss: Decimal | None,
            take_profit: Decimal | None,
    ) -> RiskRewardResult | None:
        """
        Returns:
            RiskRewardResult, or None when stop or target is missing
        """
        if stop_loss is None or take_profit is None:
            return None

        risk_distance = finite_or_none(abs(entry_price - stop_loss))
        reward_distance = finite_or_none(abs(take_profit - entry_price))

        if risk_distance is None or reward_distance is None:
            ratio = None
        elif risk_distance == ZERO:
            logger.debug("Zero risk distance: risk/reward is undefined")
            ratio = None
        else:
            ratio = finite_or_none(reward_distance / risk_distance)

        return RiskRewardResult(
            risk_distance=risk_distance,
            reward_distance=reward_distance,
            ratio=ratio,
        )


# =============================================================================
# POSITION SIZE CALCULATOR
# =============================================================================

class PositionSizeCalculator:
    """
    Suggests a lot size that risks a given percent of the reference balance.

    Formulas:
        risk_budget = reference_balance x risk_percent / 100
        suggested_size = risk_budget / (|entry - stop_loss| x contract_multiplier)

    The suggestion is advisory; the stored position_size is whatever the
    user confirms. Independent of P&L.
    """

    def __init__(self, config: ValuationConfig) -> None:
        self._config = config

    def risk_budget(self, risk_percent: Decimal) -> Decimal:
        """Quote-currency amount the trader intends to risk."""
        return self._config.reference_balance * risk_percent / HUNDRED

    def calculate(
            self,
            entry_price: Decimal,
            stop_loss: Decimal | None,
            risk_percent: Decimal | None,
    ) -> Decimal | None:
        """
        Returns:
            Suggested lot size, or None when the stop or risk percent is
            missing, the stop sits exactly at entry, or the stop distance
            is out of range
        """
        if stop_loss is None or risk_percent is None:
            return None

        stop_distance = finite_or_none(abs(entry_price - stop_loss))
        if stop_distance is None or stop_distance == ZERO:
            return None

        per_lot_risk = finite_or_none(stop_distance * self._config.contract_multiplier)
        if per_lot_risk is None:
            return None
        return finite_or_none(self.risk_budget(risk_percent) / per_lot_risk)
