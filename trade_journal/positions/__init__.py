"""Positions: aggregate raw fills into a single position record."""

from trade_journal.positions.aggregator import (
    aggregate,
    infer_direction,
    running_remaining,
    suggest_next_action,
    weighted_average_price,
)

__all__ = [
    "aggregate",
    "infer_direction",
    "running_remaining",
    "suggest_next_action",
    "weighted_average_price",
]
