"""Adapters: storage-shaped rows to engine types and back."""

from trade_journal.adapters.rows import (
    fill_from_record,
    fills_from_frame,
    position_to_record,
    positions_from_frame,
)

__all__ = [
    "fill_from_record",
    "fills_from_frame",
    "position_to_record",
    "positions_from_frame",
]
