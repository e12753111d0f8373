"""Core: config, types, errors, logging."""

from trade_journal.core.config import load_config, Config
from trade_journal.core.errors import InvalidInput
from trade_journal.core.types import (
    Direction,
    Fill,
    FillAction,
    LeaderboardWeights,
    PortfolioMetrics,
    Position,
    PositionMetrics,
    PositionStatus,
    PositionWithPnl,
    TradeResult,
)
from trade_journal.core.logger import setup_logging
from trade_journal.core.timestamps import naive_utc

__all__ = [
    "load_config",
    "Config",
    "InvalidInput",
    "Direction",
    "Fill",
    "FillAction",
    "LeaderboardWeights",
    "PortfolioMetrics",
    "Position",
    "PositionMetrics",
    "PositionStatus",
    "PositionWithPnl",
    "TradeResult",
    "setup_logging",
    "naive_utc",
]
