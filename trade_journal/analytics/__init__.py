"""Analytics: per-position metrics, portfolio metrics, breakdowns, leaderboard."""

from trade_journal.analytics.position_metrics import (
    compute_position_metrics,
    trade_duration_minutes,
    trade_result,
    with_pnl,
)
from trade_journal.analytics.portfolio import (
    compute_portfolio_metrics,
    consecutive_streaks,
    expectancy,
    max_drawdown,
    profit_factor,
    sharpe_ratio,
    total_reward_to_risk,
    win_rate,
)
from trade_journal.analytics.leaderboard import (
    RankedTrader,
    TraderEntry,
    leaderboard_score,
    rank_traders,
)
from trade_journal.analytics.breakdown import filter_positions, group_breakdown

__all__ = [
    "compute_position_metrics",
    "trade_duration_minutes",
    "trade_result",
    "with_pnl",
    "compute_portfolio_metrics",
    "consecutive_streaks",
    "expectancy",
    "max_drawdown",
    "profit_factor",
    "sharpe_ratio",
    "total_reward_to_risk",
    "win_rate",
    "RankedTrader",
    "TraderEntry",
    "leaderboard_score",
    "rank_traders",
    "filter_positions",
    "group_breakdown",
]
