"""Unit tests for adapters.rows."""

from datetime import datetime

import pandas as pd
import pytest
from trade_journal.core.errors import InvalidInput
from trade_journal.core.types import Fill, FillAction
from trade_journal.positions.aggregator import aggregate
from trade_journal.adapters.rows import (
    fill_from_record,
    fills_from_frame,
    position_to_record,
    positions_from_frame,
)


def test_legacy_aliases():
    f = fill_from_record({"side": "Buy", "date": "2024-02-01", "time": "10:15", "qty": "3", "price": 12.5})
    assert f.action is FillAction.INCREASE
    assert f.timestamp == datetime(2024, 2, 1, 10, 15)
    assert f.quantity == 3.0
    assert f.fee == 0.0
    g = fill_from_record({"action": "short", "datetime": "2024-02-01T11:00:00", "quantity": 1, "price": 9, "commission": 0.2})
    assert g.action is FillAction.DECREASE
    assert g.fee == pytest.approx(0.2)


@pytest.mark.parametrize("record", [
    {"action": "hold", "timestamp": "2024-01-01", "quantity": 1, "price": 1},
    {"action": "buy", "timestamp": "2024-01-01", "quantity": 0, "price": 1},
    {"action": "buy", "timestamp": "2024-01-01", "quantity": 1, "price": -2},
    {"action": "buy", "timestamp": "2024-01-01", "quantity": 1, "price": 1, "fee": -1},
    {"action": "buy", "quantity": 1, "price": 1},
    {"timestamp": "2024-01-01", "quantity": 1, "price": 1},
    {"action": "buy", "timestamp": "2024-01-01", "quantity": "lots", "price": 1},
])
def test_invalid_rows_rejected(record):
    with pytest.raises(InvalidInput):
        fill_from_record(record)


def test_frame_to_position_record():
    df = pd.DataFrame([
        {"action": "buy", "timestamp": "2024-03-01 09:30", "quantity": 10, "price": 100.0, "fee": 1.0},
        {"action": "sell", "timestamp": "2024-03-01 10:00", "quantity": 4, "price": 110.0, "fee": None},
        {"action": "sell", "timestamp": "2024-03-01 10:30", "quantity": 6, "price": 115.0, "fee": 1.0},
    ])
    fills = fills_from_frame(df)
    assert [f.fee for f in fills] == [1.0, 0.0, 1.0]
    rec = position_to_record(aggregate(fills))
    assert rec["action"] == "long"
    assert rec["status"] == "closed"
    assert rec["exit_price"] == pytest.approx(113.0)
    assert rec["remaining_quantity"] == 0
    assert rec["exit_time"] == "2024-03-01T10:30:00"
    assert len(rec["partial_exits"]) == 2


def test_open_position_record_has_no_exits():
    rec = position_to_record(aggregate([fill_from_record(
        {"action": "buy", "timestamp": "2024-03-01 09:30", "quantity": 1, "price": 5}
    )]))
    assert rec["exit_price"] is None
    assert rec["exit_time"] is None
    assert rec["partial_exits"] is None


def test_positions_from_frame():
    df = pd.DataFrame([
        {"net_pl": 50.0, "r2r": 1.2, "trade_date": "2024-01-02", "strategy_id": "s1", "symbol": "ES"},
        {"net_pl": None, "r2r": None, "trade_date": "2024-01-03", "strategy_id": "s1", "symbol": "ES"},
        {"net_pl": -20.0, "r2r": None, "trade_date": None, "strategy_id": None, "symbol": "NQ"},
    ])
    rows = positions_from_frame(df)
    assert len(rows) == 2
    assert rows[0].realized_reward_to_risk == pytest.approx(1.2)
    assert rows[0].sequence_date == datetime(2024, 1, 2)
    assert rows[0].strategy == "s1"
    assert rows[1].realized_reward_to_risk == 0.0
    assert rows[1].sequence_date is None
    assert rows[1].strategy is None
    assert rows[1].instrument == "NQ"


def test_aware_timestamps_become_naive_utc():
    df = pd.DataFrame([
        {"net_pnl": 10.0, "trade_date": "2024-01-02T10:00:00Z"},
        {"net_pnl": -5.0, "trade_date": "2024-01-02T10:00:00+02:00"},
        {"net_pnl": 1.0, "trade_date": "2024-01-02 09:00"},
    ])
    rows = positions_from_frame(df)
    assert rows[0].sequence_date == datetime(2024, 1, 2, 10)
    assert rows[1].sequence_date == datetime(2024, 1, 2, 8)
    assert all(r.sequence_date.tzinfo is None for r in rows)
    f = fill_from_record({"action": "buy", "timestamp": "2024-03-01T09:30:00-05:00", "quantity": 1, "price": 5})
    assert f.timestamp == datetime(2024, 3, 1, 14, 30)


def test_plain_string_actions_serialize():
    fills = [
        Fill(action="increase", timestamp=datetime(2024, 3, 1, 9, 30), quantity=2, price=10.0),
        Fill(action="decrease", timestamp=datetime(2024, 3, 1, 9, 45), quantity=2, price=12.0),
    ]
    assert fills[1].action is FillAction.DECREASE
    rec = position_to_record(aggregate(fills))
    assert rec["status"] == "closed"
    assert rec["partial_exits"][0]["action"] == "decrease"
