"""
Row adapter between storage-shaped records and the engine's typed inputs.
Legacy column names and buy/sell/long/short spellings are translated here,
so the engine only ever sees Fill, Position and PositionWithPnl.
"""

from __future__ import annotations
import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from trade_journal.core.errors import InvalidInput
from trade_journal.core.timestamps import naive_utc
from trade_journal.core.types import Fill, FillAction, Position, PositionWithPnl

logger = logging.getLogger("trade_journal.adapters.rows")

_ACTION_ALIASES = {
    "increase": FillAction.INCREASE,
    "buy": FillAction.INCREASE,
    "long": FillAction.INCREASE,
    "decrease": FillAction.DECREASE,
    "sell": FillAction.DECREASE,
    "short": FillAction.DECREASE,
}


def _missing(value: Any) -> bool:
    return value is None or (not isinstance(value, str) and pd.isna(value))


def _first(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = record.get(key)
        if not _missing(value) and value != "":
            return value
    return None


def parse_action(value: Any) -> FillAction:
    if isinstance(value, FillAction):
        return value
    action = _ACTION_ALIASES.get(str(value).strip().lower())
    if action is None:
        raise InvalidInput(f"unknown action: {value!r}")
    return action


def parse_timestamp(value: Any) -> Optional[datetime]:
    """datetime, pandas Timestamp, or ISO-ish string, as naive UTC. None for missing."""
    if _missing(value) or value == "":
        return None
    if isinstance(value, datetime):
        return naive_utc(value)
    try:
        return naive_utc(pd.Timestamp(value))
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"unparseable timestamp: {value!r}") from e


def _float(value: Any, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"{name} is not a number: {value!r}") from e


def fill_from_record(record: Mapping[str, Any]) -> Fill:
    """
    Build a Fill from a dict. Accepts action|side, timestamp|datetime|date+time,
    quantity|qty, price, fee|fees|commission. Validates quantity > 0, price > 0, fee >= 0.
    """
    raw_action = _first(record, "action", "side")
    if raw_action is None:
        raise InvalidInput("fill row has no action")
    action = parse_action(raw_action)

    raw_ts = _first(record, "timestamp", "datetime")
    if raw_ts is None and _first(record, "date") is not None:
        time_part = _first(record, "time") or "00:00"
        raw_ts = f"{_first(record, 'date')} {time_part}"
    timestamp = parse_timestamp(raw_ts)
    if timestamp is None:
        raise InvalidInput("fill row has no timestamp")

    raw_qty = _first(record, "quantity", "qty")
    raw_price = _first(record, "price")
    if raw_qty is None or raw_price is None:
        raise InvalidInput("fill row needs quantity and price")
    quantity = _float(raw_qty, "quantity")
    price = _float(raw_price, "price")
    raw_fee = _first(record, "fee", "fees", "commission")
    fee = _float(raw_fee, "fee") if raw_fee is not None else 0.0

    if quantity <= 0:
        raise InvalidInput(f"quantity must be positive, got {quantity}")
    if price <= 0:
        raise InvalidInput(f"price must be positive, got {price}")
    if fee < 0:
        raise InvalidInput(f"fee must be non-negative, got {fee}")
    return Fill(action=action, timestamp=timestamp, quantity=quantity, price=price, fee=fee)


def fills_from_frame(df: pd.DataFrame) -> List[Fill]:
    """Fills in DataFrame row order."""
    return [fill_from_record(rec) for rec in df.to_dict(orient="records")]


def position_to_record(position: Position) -> Dict[str, Any]:
    """Denormalized columns the storage layer keeps next to the raw fills."""
    return {
        "action": position.direction.value,
        "quantity": position.total_main_quantity,
        "entry_price": position.weighted_entry_price,
        "exit_price": position.weighted_exit_price,
        "entry_time": position.entry_time.isoformat(),
        "exit_time": position.exit_time.isoformat() if position.exit_time else None,
        "fees": position.total_fees,
        "remaining_quantity": position.remaining_quantity,
        "total_exit_quantity": position.total_exit_quantity,
        "status": position.status.value,
        "partial_exits": [
            {
                "action": FillAction(f.action).value,
                "datetime": f.timestamp.isoformat(),
                "quantity": f.quantity,
                "price": f.price,
                "fee": f.fee,
            }
            for f in position.exit_fills
        ] or None,
    }


def _label(value: Any) -> Optional[str]:
    return None if _missing(value) or value == "" else str(value)


def positions_from_frame(df: pd.DataFrame) -> List[PositionWithPnl]:
    """
    Portfolio rows from a trade table. Needs net_pnl (or net_pl); optional
    r2r|realized_reward_to_risk, trade_date|exit_time|entry_time, strategy, instrument, account.
    Rows with no P&L yet (open trades) are skipped.
    """
    out = []
    skipped = 0
    for rec in df.to_dict(orient="records"):
        pnl = _first(rec, "net_pnl", "net_pl")
        if pnl is None:
            skipped += 1
            continue
        rr = _first(rec, "realized_reward_to_risk", "r2r")
        out.append(PositionWithPnl(
            net_pnl=_float(pnl, "net_pnl"),
            realized_reward_to_risk=_float(rr, "r2r") if rr is not None else 0.0,
            sequence_date=parse_timestamp(_first(rec, "trade_date", "exit_time", "entry_time")),
            strategy=_label(_first(rec, "strategy", "strategy_id")),
            instrument=_label(_first(rec, "instrument", "symbol")),
            account=_label(_first(rec, "account", "account_id")),
        ))
    if skipped:
        logger.info("Skipped %d rows without net P&L", skipped)
    return out
