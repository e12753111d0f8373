"""
Per-group breakdowns (by strategy, instrument, account) and trade-set filtering.
"""

from __future__ import annotations
import logging
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

import pandas as pd

from trade_journal.core.timestamps import naive_utc
from trade_journal.core.types import PositionWithPnl

logger = logging.getLogger("trade_journal.analytics.breakdown")

BREAKDOWN_COLUMNS = [
    "group",
    "trades",
    "net_pnl",
    "win_rate",
    "expectancy",
    "total_profit",
    "total_loss",
    "avg_reward_to_risk",
]
GROUP_KEYS = ("strategy", "instrument", "account")


def filter_positions(
    positions: Sequence[PositionWithPnl],
    accounts: Optional[Iterable[str]] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> List[PositionWithPnl]:
    """
    Keep positions in the given accounts and inside [start, end].
    An empty/None account list means all accounts. With a date bound, undated rows are dropped.
    Dates compare as naive UTC, so aware and naive bounds and rows can be mixed.
    """
    account_set = set(accounts) if accounts else None
    start = naive_utc(start) if start is not None else None
    end = naive_utc(end) if end is not None else None
    out = []
    for p in positions:
        if account_set is not None and p.account not in account_set:
            continue
        if start is not None or end is not None:
            if p.sequence_date is None:
                continue
            when = naive_utc(p.sequence_date)
            if start is not None and when < start:
                continue
            if end is not None and when > end:
                continue
        out.append(p)
    return out


def group_breakdown(
    positions: Sequence[PositionWithPnl],
    key: str = "strategy",
    top: Optional[int] = None,
) -> pd.DataFrame:
    """
    One row per group, sorted by |net_pnl| descending. `top` keeps the first N rows.
    Expectancy here is the plain average P&L per trade in the group.
    """
    if key not in GROUP_KEYS:
        raise ValueError(f"Unsupported breakdown key: {key}")
    rows = [
        {"group": getattr(p, key), "net_pnl": float(p.net_pnl), "rr": float(p.realized_reward_to_risk)}
        for p in positions
        if getattr(p, key)
    ]
    if not rows:
        return pd.DataFrame(columns=BREAKDOWN_COLUMNS)
    df = pd.DataFrame(rows)
    df["win"] = df["net_pnl"] > 0
    df["profit"] = df["net_pnl"].where(df["net_pnl"] > 0, 0.0)
    df["loss"] = (-df["net_pnl"]).where(df["net_pnl"] <= 0, 0.0)
    grouped = df.groupby("group", sort=False).agg(
        trades=("net_pnl", "size"),
        net_pnl=("net_pnl", "sum"),
        wins=("win", "sum"),
        total_profit=("profit", "sum"),
        total_loss=("loss", "sum"),
        rr_sum=("rr", "sum"),
    ).reset_index()
    grouped["win_rate"] = grouped["wins"] / grouped["trades"] * 100.0
    grouped["expectancy"] = grouped["net_pnl"] / grouped["trades"]
    grouped["avg_reward_to_risk"] = grouped["rr_sum"] / grouped["trades"]
    grouped = grouped.reindex(grouped["net_pnl"].abs().sort_values(ascending=False, kind="stable").index)
    if top is not None:
        grouped = grouped.head(top)
    logger.debug("Breakdown by %s: %d groups", key, len(grouped))
    return grouped[BREAKDOWN_COLUMNS].reset_index(drop=True)
