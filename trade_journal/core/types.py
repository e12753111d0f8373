"""
Core data types for fills, positions, and their derived metrics.
"""

from __future__ import annotations
from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class FillAction(str, Enum):
    INCREASE = "increase"
    DECREASE = "decrease"

    @property
    def opposite(self) -> "FillAction":
        return FillAction.DECREASE if self is FillAction.INCREASE else FillAction.INCREASE


class Direction(str, Enum):
    LONG = "long"
    SHORT = "short"

    @classmethod
    def from_action(cls, action: FillAction) -> "Direction":
        """The side a position is on when `action` opens it."""
        return cls.LONG if FillAction(action) is FillAction.INCREASE else cls.SHORT

    @property
    def opening_action(self) -> FillAction:
        return FillAction.INCREASE if self is Direction.LONG else FillAction.DECREASE


class PositionStatus(str, Enum):
    OPEN = "open"
    PARTIALLY_CLOSED = "partially_closed"
    CLOSED = "closed"


class TradeResult(str, Enum):
    WIN = "win"
    LOSS = "loss"
    BREAKEVEN = "breakeven"


@dataclass(frozen=True)
class Fill:
    """One executed order leg."""
    action: FillAction
    timestamp: datetime
    quantity: float
    price: float
    fee: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "action", FillAction(self.action))


@dataclass(frozen=True)
class Position:
    """Position aggregated from its fills. Rebuilt from scratch on every fill edit."""
    direction: Direction
    total_main_quantity: float
    weighted_entry_price: float
    total_exit_quantity: float
    weighted_exit_price: Optional[float]
    remaining_quantity: float
    status: PositionStatus
    entry_time: datetime
    exit_time: Optional[datetime]
    total_fees: float
    exit_fills: Tuple[Fill, ...] = ()

    @property
    def is_closed(self) -> bool:
        return self.status is PositionStatus.CLOSED


@dataclass
class PositionMetrics:
    """Per-position P&L and risk figures."""
    gross_pnl: float
    net_pnl: float
    percent_gain: float
    trade_risk: float
    realized_reward_to_risk: float
    result: Optional[TradeResult] = None
    duration_minutes: Optional[int] = None


@dataclass
class PositionWithPnl:
    """Portfolio input row: a position's outcome plus the labels used for grouping."""
    net_pnl: float
    realized_reward_to_risk: float = 0.0
    sequence_date: Optional[datetime] = None
    strategy: Optional[str] = None
    instrument: Optional[str] = None
    account: Optional[str] = None


@dataclass
class PortfolioMetrics:
    """Aggregate performance over a set of positions."""
    win_rate: float = 0.0
    profit_factor: float = 0.0
    avg_winner: float = 0.0
    avg_loser: float = 0.0
    largest_profit: float = 0.0
    largest_loss: float = 0.0
    net_pnl: float = 0.0
    total_reward_to_risk: float = 0.0
    total_trades: int = 0
    max_drawdown: float = 0.0
    sharpe_ratio: float = 0.0
    expectancy: float = 0.0
    winning_trades: int = 0
    losing_trades: int = 0
    breakeven_trades: int = 0
    gross_profit: float = 0.0
    gross_loss: float = 0.0
    avg_win_loss: float = 0.0
    max_consecutive_wins: int = 0
    max_consecutive_losses: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class LeaderboardWeights:
    """Weights for the cross-trader ranking score. A tuning knob, not a statistic."""
    win_rate: float = 0.3
    profit_factor: float = 10.0
    net_pnl: float = 0.001
    followers: float = 0.1
