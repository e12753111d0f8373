"""
Leaderboard score: weighted linear blend used only to rank traders against each other.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence

from trade_journal.core.types import LeaderboardWeights, PortfolioMetrics


@dataclass
class TraderEntry:
    trader_id: str
    metrics: PortfolioMetrics
    followers: int = 0


@dataclass
class RankedTrader:
    rank: int
    trader_id: str
    score: float
    metrics: PortfolioMetrics
    followers: int = 0


def leaderboard_score(
    metrics: PortfolioMetrics,
    followers: int = 0,
    weights: Optional[LeaderboardWeights] = None,
) -> float:
    """win_rate*w + profit_factor*w + net_pnl*w + followers*w. Defaults: 0.3, 10, 1/1000, 0.1."""
    w = weights or LeaderboardWeights()
    return (
        metrics.win_rate * w.win_rate
        + metrics.profit_factor * w.profit_factor
        + metrics.net_pnl * w.net_pnl
        + followers * w.followers
    )


def rank_traders(
    entries: Sequence[TraderEntry],
    weights: Optional[LeaderboardWeights] = None,
) -> List[RankedTrader]:
    """Score and sort descending. Ties keep input order; ranks are 1-based."""
    scored = [(leaderboard_score(e.metrics, e.followers, weights), e) for e in entries]
    scored.sort(key=lambda item: item[0], reverse=True)
    return [
        RankedTrader(rank=i, trader_id=e.trader_id, score=score, metrics=e.metrics, followers=e.followers)
        for i, (score, e) in enumerate(scored, start=1)
    ]
