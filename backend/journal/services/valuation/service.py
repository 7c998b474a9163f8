# backend/journal/services/valuation/service.py
"""
Trade valuation entry points.

value_trade() is the pure engine: raw inputs in, ValuedTrade or
TradeValidationIssue out. It never raises for bad input, performs no I/O
and keeps no state, so it is safe to call concurrently.

ValuationService wraps the engine with the application's configuration,
adds logging, and offers value_or_raise() for callers that use exception
flow (the API layer).

Architecture:
    value_trade(inputs, config)
        ├── validation.check_inputs      → CheckedInputs | TradeValidationIssue
        ├── PnLCalculator                → pnl_quote / pnl_secondary / pnl_percent
        ├── RiskRewardCalculator         → risk_reward_ratio
        └── PositionSizeCalculator       → suggested_position_size
"""

from __future__ import annotations

import logging
from decimal import InvalidOperation, Overflow, localcontext

from journal.services.exceptions import TradeValidationError
from journal.services.valuation.calculators import (
    PnLCalculator,
    PositionSizeCalculator,
    RiskRewardCalculator,
)
from journal.services.valuation.types import (
    TradeInputs,
    TradeValidationIssue,
    ValuationConfig,
    ValuationIssueKind,
    ValuationOutcome,
    ValuedTrade,
)
from journal.services.valuation.validation import CheckedInputs, check_inputs

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = ValuationConfig()

_REQUIRED_FIELDS = ("entry_price", "exit_price", "position_size")


def _out_of_range_issue(checked: CheckedInputs) -> TradeValidationIssue:
    """Blame the required input with the largest exponent for a non-finite P&L."""
    field = max(_REQUIRED_FIELDS, key=lambda name: getattr(checked, name).adjusted())
    return TradeValidationIssue(
        kind=ValuationIssueKind.MISSING_FIELD,
        message=f"{field} is too large to value",
        field=field,
    )


def value_trade(
        inputs: TradeInputs,
        config: ValuationConfig | None = None,
) -> ValuationOutcome:
    """
    Value a single trade.

    Args:
        inputs: Raw trade inputs
        config: Valuation constants (defaults to the built-in constants)

    Returns:
        ValuedTrade on success, TradeValidationIssue (MISSING_FIELD or
        BRACKET_INVALID) when the inputs are unusable. Inputs so large that
        the P&L leaves the Decimal range are reported as MISSING_FIELD.
    """
    config = config or _DEFAULT_CONFIG

    checked = check_inputs(inputs)
    if isinstance(checked, TradeValidationIssue):
        return checked

    # Out-of-range arithmetic yields Infinity/NaN here instead of raising
    with localcontext() as ctx:
        ctx.traps[Overflow] = False
        ctx.traps[InvalidOperation] = False

        pnl = PnLCalculator(config).calculate(
            direction=checked.direction,
            entry_price=checked.entry_price,
            exit_price=checked.exit_price,
            position_size=checked.position_size,
        )
        risk_reward = RiskRewardCalculator().calculate(
            entry_price=checked.entry_price,
            stop_loss=checked.stop_loss,
            take_profit=checked.take_profit,
        )
        suggested_size = PositionSizeCalculator(config).calculate(
            entry_price=checked.entry_price,
            stop_loss=checked.stop_loss,
            risk_percent=checked.risk_percent,
        )

    if not all(value.is_finite() for value in (
            pnl.pnl_quote, pnl.pnl_secondary, pnl.pnl_percent, pnl.notional)):
        return _out_of_range_issue(checked)

    notices: list[TradeValidationIssue] = []
    if checked.stop_loss is not None and checked.stop_loss == checked.entry_price:
        notices.append(TradeValidationIssue(
            kind=ValuationIssueKind.DEGENERATE_RISK,
            message="stop_loss equals entry_price: risk/reward and position size are undefined",
            field="stop_loss",
        ))

    return ValuedTrade(
        direction=checked.direction,
        entry_price=checked.entry_price,
        exit_price=checked.exit_price,
        position_size=checked.position_size,
        stop_loss=checked.stop_loss,
        take_profit=checked.take_profit,
        risk_percent=checked.risk_percent,
        pnl_quote=pnl.pnl_quote,
        pnl_secondary=pnl.pnl_secondary,
        pnl_percent=pnl.pnl_percent,
        notional=pnl.notional,
        risk_reward_ratio=risk_reward.ratio if risk_reward else None,
        suggested_position_size=suggested_size,
        risk_distance=risk_reward.risk_distance if risk_reward else None,
        reward_distance=risk_reward.reward_distance if risk_reward else None,
        contract_multiplier=config.contract_multiplier,
        notices=tuple(notices),
    )


class ValuationService:
    """
    Application-facing valuation service.

    Holds the injected ValuationConfig so callers do not have to pass it
    around. Stateless otherwise; one instance is shared across requests.
    """

    def __init__(self, config: ValuationConfig | None = None) -> None:
        self._config = config or ValuationConfig()

    @property
    def config(self) -> ValuationConfig:
        return self._config

    def value(self, inputs: TradeInputs) -> ValuationOutcome:
        """Value a trade, returning an issue instead of raising."""
        outcome = value_trade(inputs, self._config)

        if isinstance(outcome, TradeValidationIssue):
            logger.info(
                f"Trade rejected by validation: {outcome.kind.value} "
                f"(field={outcome.field})"
            )
        elif outcome.notices:
            logger.info(
                f"Trade valued with notices: "
                f"{', '.join(n.kind.value for n in outcome.notices)}"
            )
        else:
            logger.debug(f"Trade valued: pnl_quote={outcome.pnl_quote}")

        return outcome

    def value_or_raise(self, inputs: TradeInputs) -> ValuedTrade:
        """
        Value a trade or raise.

        Raises:
            TradeValidationError: If the inputs fail validation
        """
        outcome = self.value(inputs)
        if isinstance(outcome, TradeValidationIssue):
            raise TradeValidationError(outcome)
        return outcome
