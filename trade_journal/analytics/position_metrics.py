"""
Per-position metrics: gross/net P&L, percent gain, risk to stop, realized reward-to-risk.

Gross P&L values the whole main quantity at the weighted exit price, so a
partially closed position is shown as if it were flat at that price.
Nothing here raises; missing exit or stop-loss yields zeros.
"""

from __future__ import annotations
import logging
import math
from datetime import datetime
from typing import Optional

from trade_journal.core.types import (
    Direction,
    Position,
    PositionMetrics,
    PositionWithPnl,
    TradeResult,
)

logger = logging.getLogger("trade_journal.analytics.position")


def _price_diff(position: Position) -> float:
    """Per-unit move in the position's favour. 0 without an exit."""
    if position.weighted_exit_price is None:
        return 0.0
    if position.direction is Direction.LONG:
        return position.weighted_exit_price - position.weighted_entry_price
    return position.weighted_entry_price - position.weighted_exit_price


def trade_result(net_pnl: Optional[float]) -> Optional[TradeResult]:
    if net_pnl is None:
        return None
    if net_pnl > 0:
        return TradeResult.WIN
    if net_pnl < 0:
        return TradeResult.LOSS
    return TradeResult.BREAKEVEN


def trade_duration_minutes(entry_time: Optional[datetime], exit_time: Optional[datetime]) -> Optional[int]:
    """Whole minutes between entry and exit, None while the position has no exit."""
    if entry_time is None or exit_time is None:
        return None
    return math.floor((exit_time - entry_time).total_seconds() / 60)


def compute_position_metrics(
    position: Position,
    stop_loss: Optional[float] = None,
    contract_multiplier: float = 1.0,
) -> PositionMetrics:
    has_exit = position.weighted_exit_price is not None
    qty = position.total_main_quantity
    entry = position.weighted_entry_price
    diff = _price_diff(position)

    gross_pnl = diff * qty * contract_multiplier if has_exit else 0.0
    net_pnl = gross_pnl - abs(position.total_fees)
    percent_gain = diff / entry * 100.0 if has_exit and entry else 0.0

    trade_risk = 0.0
    realized_rr = 0.0
    if stop_loss is not None:
        trade_risk = abs(entry - stop_loss) * qty * contract_multiplier
        risk_per_unit = entry - stop_loss if position.direction is Direction.LONG else stop_loss - entry
        if has_exit and risk_per_unit > 0:
            realized_rr = abs(diff / risk_per_unit)
        elif has_exit:
            logger.debug("Stop %.8g is on the wrong side of entry %.8g; R:R left at 0", stop_loss, entry)

    return PositionMetrics(
        gross_pnl=gross_pnl,
        net_pnl=net_pnl,
        percent_gain=percent_gain,
        trade_risk=trade_risk,
        realized_reward_to_risk=realized_rr,
        result=trade_result(net_pnl) if has_exit else None,
        duration_minutes=trade_duration_minutes(position.entry_time, position.exit_time),
    )


def with_pnl(
    position: Position,
    metrics: PositionMetrics,
    strategy: Optional[str] = None,
    instrument: Optional[str] = None,
    account: Optional[str] = None,
) -> PositionWithPnl:
    """Portfolio row for a position, dated by its exit (entry while still open)."""
    return PositionWithPnl(
        net_pnl=metrics.net_pnl,
        realized_reward_to_risk=metrics.realized_reward_to_risk,
        sequence_date=position.exit_time or position.entry_time,
        strategy=strategy,
        instrument=instrument,
        account=account,
    )
