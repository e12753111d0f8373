"""Timestamp normalization so stored naive and tz-aware dates compare cleanly."""

from __future__ import annotations
from datetime import datetime

import pandas as pd


def naive_utc(ts: datetime) -> datetime:
    """Aware timestamps are converted to UTC and stripped; naive ones are taken as UTC already."""
    stamp = pd.Timestamp(ts)
    if stamp.tzinfo is not None:
        stamp = stamp.tz_convert(None)
    return stamp.to_pydatetime()
