"""Unit tests for analytics.breakdown."""

from datetime import datetime, timedelta, timezone

import pytest
from trade_journal.core.types import PositionWithPnl
from trade_journal.analytics.breakdown import BREAKDOWN_COLUMNS, filter_positions, group_breakdown


def row(pnl, strategy=None, account=None, day=1, rr=0.0):
    return PositionWithPnl(
        net_pnl=pnl,
        realized_reward_to_risk=rr,
        sequence_date=datetime(2024, 5, day),
        strategy=strategy,
        account=account,
    )


def test_group_breakdown_by_strategy():
    positions = [
        row(100.0, "breakout", rr=2.0),
        row(-40.0, "breakout", rr=0.0),
        row(-300.0, "fade"),
        row(10.0, None),
    ]
    df = group_breakdown(positions, key="strategy")
    assert list(df.columns) == BREAKDOWN_COLUMNS
    # sorted by |net_pnl|: fade (-300) before breakout (60)
    assert list(df["group"]) == ["fade", "breakout"]
    breakout = df.iloc[1]
    assert breakout["trades"] == 2
    assert breakout["net_pnl"] == pytest.approx(60.0)
    assert breakout["win_rate"] == pytest.approx(50.0)
    assert breakout["expectancy"] == pytest.approx(30.0)
    assert breakout["total_profit"] == pytest.approx(100.0)
    assert breakout["total_loss"] == pytest.approx(40.0)
    assert breakout["avg_reward_to_risk"] == pytest.approx(1.0)


def test_group_breakdown_top_and_empty():
    positions = [row(1.0, "a"), row(5.0, "b"), row(3.0, "c")]
    assert list(group_breakdown(positions, top=2)["group"]) == ["b", "c"]
    empty = group_breakdown([])
    assert empty.empty
    assert list(empty.columns) == BREAKDOWN_COLUMNS


def test_group_breakdown_rejects_unknown_key():
    with pytest.raises(ValueError):
        group_breakdown([row(1.0, "a")], key="colour")


def test_filter_positions():
    positions = [row(1.0, account="x", day=1), row(2.0, account="y", day=10), row(3.0, account="x", day=20)]
    assert [p.net_pnl for p in filter_positions(positions, accounts=["x"])] == [1.0, 3.0]
    in_range = filter_positions(positions, start=datetime(2024, 5, 5), end=datetime(2024, 5, 15))
    assert [p.net_pnl for p in in_range] == [2.0]
    assert filter_positions(positions, accounts=[]) == positions
    undated = [PositionWithPnl(net_pnl=1.0)]
    assert filter_positions(undated, start=datetime(2024, 1, 1)) == []


def test_filter_positions_mixed_aware_and_naive():
    plus2 = timezone(timedelta(hours=2))
    positions = [
        PositionWithPnl(net_pnl=1.0, sequence_date=datetime(2024, 5, 1, 1, tzinfo=plus2)),
        PositionWithPnl(net_pnl=2.0, sequence_date=datetime(2024, 5, 1, 12)),
        PositionWithPnl(net_pnl=3.0, sequence_date=datetime(2024, 5, 2, tzinfo=timezone.utc)),
    ]
    # first row is 2024-04-30 23:00 UTC
    naive_bounds = filter_positions(positions, start=datetime(2024, 5, 1), end=datetime(2024, 5, 1, 23))
    assert [p.net_pnl for p in naive_bounds] == [2.0]
    aware_bounds = filter_positions(positions, start=datetime(2024, 5, 1, 12, tzinfo=timezone.utc))
    assert [p.net_pnl for p in aware_bounds] == [2.0, 3.0]
