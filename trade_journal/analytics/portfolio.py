"""
Portfolio metrics over a set of positions with known net P&L:
win rate, profit factor, expectancy, max drawdown, per-trade Sharpe, streaks.
All ratios are guarded; empty or degenerate input gives zeros, never inf/nan.
"""

from __future__ import annotations
import logging
from typing import List, Sequence, Tuple

import numpy as np

from trade_journal.core.config import DEFAULT_PROFIT_FACTOR_SENTINEL
from trade_journal.core.timestamps import naive_utc
from trade_journal.core.types import PortfolioMetrics, PositionWithPnl

logger = logging.getLogger("trade_journal.analytics.portfolio")


def chronological(positions: Sequence[PositionWithPnl]) -> List[PositionWithPnl]:
    """Stable sort by sequence_date (compared as naive UTC). Undated rows go first, in caller order."""
    undated = sum(1 for p in positions if p.sequence_date is None)
    if undated:
        logger.warning("%d of %d positions have no sequence date; ordered first", undated, len(positions))
    return sorted(
        positions,
        key=lambda p: (0, 0) if p.sequence_date is None else (1, naive_utc(p.sequence_date)),
    )


def win_rate(pnls: Sequence[float]) -> float:
    """Percent of trades with positive P&L."""
    if not pnls:
        return 0.0
    return sum(1 for p in pnls if p > 0) / len(pnls) * 100.0


def profit_factor(pnls: Sequence[float], sentinel: float = DEFAULT_PROFIT_FACTOR_SENTINEL) -> float:
    """Gross profit / gross loss. `sentinel` when there are wins but no losses, 0 when neither."""
    wins = sum(p for p in pnls if p > 0)
    losses = sum(-p for p in pnls if p < 0)
    if losses <= 0:
        return sentinel if wins > 0 else 0.0
    return wins / losses


def expectancy(pnls: Sequence[float]) -> float:
    """P(win) * avg win - P(loss) * avg loss magnitude."""
    if not pnls:
        return 0.0
    wins = [p for p in pnls if p > 0]
    losses = [-p for p in pnls if p < 0]
    avg_win = sum(wins) / len(wins) if wins else 0.0
    avg_loss = sum(losses) / len(losses) if losses else 0.0
    n = len(pnls)
    return len(wins) / n * avg_win - len(losses) / n * avg_loss


def max_drawdown(pnls: Sequence[float]) -> float:
    """Largest peak-to-trough drop of the cumulative P&L curve, as a positive amount."""
    if not pnls:
        return 0.0
    equity = np.cumsum(np.asarray(pnls, dtype=float))
    peak = np.maximum.accumulate(equity)
    return float(max(0.0, np.max(peak - equity)))


def sharpe_ratio(pnls: Sequence[float]) -> float:
    """Per-trade Sharpe: mean / sample std. Not annualized."""
    if len(pnls) < 2:
        return 0.0
    arr = np.asarray(pnls, dtype=float)
    std = arr.std(ddof=1)
    if std <= 1e-12:
        return 0.0
    return float(arr.mean() / std)


def total_reward_to_risk(positions: Sequence[PositionWithPnl]) -> float:
    """Raw sum of realized R:R. Kept as a sum, not a mean, to match stored history."""
    return float(sum(p.realized_reward_to_risk for p in positions))


def consecutive_streaks(pnls: Sequence[float]) -> Tuple[int, int]:
    """Longest run of wins and of losses. Breakeven trades neither extend nor break a run."""
    best_wins = best_losses = 0
    wins = losses = 0
    for p in pnls:
        if p > 0:
            wins += 1
            losses = 0
            best_wins = max(best_wins, wins)
        elif p < 0:
            losses += 1
            wins = 0
            best_losses = max(best_losses, losses)
    return best_wins, best_losses


def compute_portfolio_metrics(
    positions: Sequence[PositionWithPnl],
    profit_factor_sentinel: float = DEFAULT_PROFIT_FACTOR_SENTINEL,
) -> PortfolioMetrics:
    """
    Compute portfolio metrics. Positions are re-sorted by sequence_date
    before the order-dependent figures (drawdown, streaks).
    """
    total_trades = len(positions)
    if total_trades == 0:
        return PortfolioMetrics()
    ordered = chronological(positions)
    pnls = [float(p.net_pnl) for p in ordered]
    wins = [p for p in pnls if p > 0]
    losses = [p for p in pnls if p < 0]
    gross_profit = sum(wins)
    gross_loss = -sum(losses)
    avg_winner = gross_profit / len(wins) if wins else 0.0
    avg_loser = gross_loss / len(losses) if losses else 0.0
    best_wins, best_losses = consecutive_streaks(pnls)

    metrics = PortfolioMetrics(
        win_rate=win_rate(pnls),
        profit_factor=profit_factor(pnls, profit_factor_sentinel),
        avg_winner=avg_winner,
        avg_loser=avg_loser,
        largest_profit=max(wins) if wins else 0.0,
        largest_loss=min(losses) if losses else 0.0,
        net_pnl=sum(pnls),
        total_reward_to_risk=total_reward_to_risk(ordered),
        total_trades=total_trades,
        max_drawdown=max_drawdown(pnls),
        sharpe_ratio=sharpe_ratio(pnls),
        expectancy=expectancy(pnls),
        winning_trades=len(wins),
        losing_trades=len(losses),
        breakeven_trades=total_trades - len(wins) - len(losses),
        gross_profit=gross_profit,
        gross_loss=gross_loss,
        avg_win_loss=avg_winner / avg_loser if avg_loser > 0 else 0.0,
        max_consecutive_wins=best_wins,
        max_consecutive_losses=best_losses,
    )
    logger.debug(
        "Portfolio: %d trades, net=%.2f, win_rate=%.1f%%, pf=%.2f, mdd=%.2f",
        total_trades, metrics.net_pnl, metrics.win_rate, metrics.profit_factor, metrics.max_drawdown,
    )
    return metrics
