"""
Position aggregator: turns an ordered list of fills into one Position.
Fills are taken in the order given. Row order decides direction (unless passed
explicitly) and which exit is the last one; timestamps are never re-sorted.
"""

from __future__ import annotations
import logging
from typing import List, Optional, Sequence

from trade_journal.core.errors import InvalidInput
from trade_journal.core.types import Direction, Fill, FillAction, Position, PositionStatus

logger = logging.getLogger("trade_journal.positions")


def weighted_average_price(fills: Sequence[Fill]) -> Optional[float]:
    """Quantity-weighted mean price. None when total quantity is zero."""
    total_qty = sum(f.quantity for f in fills)
    if total_qty <= 0:
        return None
    return sum(f.quantity * f.price for f in fills) / total_qty


def infer_direction(fills: Sequence[Fill]) -> Direction:
    """First row is authoritative for the position's side."""
    if not fills:
        raise InvalidInput("cannot infer direction from an empty fill list")
    return Direction.from_action(fills[0].action)


def _position_status(main_qty: float, exit_qty: float) -> PositionStatus:
    if exit_qty <= 0:
        return PositionStatus.OPEN
    if exit_qty >= main_qty:
        return PositionStatus.CLOSED
    return PositionStatus.PARTIALLY_CLOSED


def aggregate(fills: Sequence[Fill], direction: Optional[Direction] = None) -> Position:
    """
    Aggregate fills for one instrument into a Position.

    direction: explicit side when the caller knows it; otherwise inferred from fills[0].
    entry_time is the first main-side row, exit_time the last exit row.
    Raises InvalidInput on an empty list or when the main leg has no quantity.
    """
    if not fills:
        raise InvalidInput("at least one fill is required")
    side = Direction(direction) if direction is not None else infer_direction(fills)
    main_action = side.opening_action

    main_rows = [f for f in fills if FillAction(f.action) is main_action]
    exit_rows = [f for f in fills if FillAction(f.action) is main_action.opposite]

    total_main_qty = sum(f.quantity for f in main_rows)
    entry_price = weighted_average_price(main_rows)
    if entry_price is None:
        raise InvalidInput(f"{side.value} position has no {main_action.value} quantity")

    total_exit_qty = sum(f.quantity for f in exit_rows)
    exit_price = weighted_average_price(exit_rows)

    if total_exit_qty > total_main_qty:
        logger.warning(
            "Exit quantity %.8g exceeds main quantity %.8g; remaining clamped to 0",
            total_exit_qty, total_main_qty,
        )

    position = Position(
        direction=side,
        total_main_quantity=total_main_qty,
        weighted_entry_price=entry_price,
        total_exit_quantity=total_exit_qty,
        weighted_exit_price=exit_price,
        remaining_quantity=max(0.0, total_main_qty - total_exit_qty),
        status=_position_status(total_main_qty, total_exit_qty),
        entry_time=main_rows[0].timestamp,
        exit_time=exit_rows[-1].timestamp if exit_rows else None,
        total_fees=sum(f.fee for f in fills),
        exit_fills=tuple(exit_rows),
    )
    logger.debug(
        "Aggregated %d fills -> %s %s qty=%.8g entry=%.8g remaining=%.8g",
        len(fills), position.direction.value, position.status.value,
        total_main_qty, entry_price, position.remaining_quantity,
    )
    return position


def running_remaining(fills: Sequence[Fill]) -> List[float]:
    """Open quantity left after each row, using the first row's side."""
    if not fills:
        return []
    main_action = FillAction(fills[0].action)
    main_qty = 0.0
    exit_qty = 0.0
    out = []
    for f in fills:
        if FillAction(f.action) is main_action:
            main_qty += f.quantity
        else:
            exit_qty += f.quantity
        out.append(max(0.0, main_qty - exit_qty))
    return out


def suggest_next_action(fills: Sequence[Fill]) -> FillAction:
    """
    Action a new row most likely has: an exit while quantity is open,
    otherwise another main-side entry.
    """
    if not fills:
        return FillAction.INCREASE
    main_action = FillAction(fills[0].action)
    if running_remaining(fills)[-1] > 0:
        return main_action.opposite
    return main_action
