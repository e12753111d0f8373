#!/usr/bin/env python3
"""
Trade journal CLI: position | portfolio
Usage:
  python main.py position fills.csv [--stop-loss 95] [--multiplier 1] [--direction long]
  python main.py [--config config.yaml] [--quiet] portfolio trades.csv [--group-by strategy] [--followers 0]
"""

from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path

import pandas as pd

# Project root
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from trade_journal.core.config import load_config
from trade_journal.core.errors import InvalidInput
from trade_journal.core.logger import setup_logging
from trade_journal.core.types import Direction
from trade_journal.positions.aggregator import aggregate
from trade_journal.analytics.position_metrics import compute_position_metrics
from trade_journal.analytics.portfolio import compute_portfolio_metrics
from trade_journal.analytics.leaderboard import leaderboard_score
from trade_journal.analytics.breakdown import group_breakdown
from trade_journal.adapters.rows import fills_from_frame, position_to_record, positions_from_frame

logger = logging.getLogger("trade_journal")


def read_table(path: Path) -> pd.DataFrame:
    """CSV or JSON (list of records) into a DataFrame, row order preserved."""
    if path.suffix.lower() == ".json":
        return pd.read_json(path, orient="records", convert_dates=False)
    return pd.read_csv(path)


def run_position(args: argparse.Namespace) -> int:
    """Aggregate one position's fills and print it with its metrics."""
    config = load_config(args.config, ROOT)
    setup_logging(config.log_level, config.log_dir, config.log_file, console=not args.quiet)
    fills = fills_from_frame(read_table(args.file))
    direction = Direction(args.direction) if args.direction else None
    position = aggregate(fills, direction=direction)
    multiplier = args.multiplier if args.multiplier is not None else config.default_contract_multiplier
    m = compute_position_metrics(position, stop_loss=args.stop_loss, contract_multiplier=multiplier)
    logger.info("Aggregated %d fills from %s", len(fills), args.file)
    print(json.dumps(position_to_record(position), indent=2))
    print("\n--- Position Metrics ---")
    print(f"Status: {position.status.value} (remaining {position.remaining_quantity:g})")
    print(f"Gross P&L: {m.gross_pnl:.2f}")
    print(f"Net P&L: {m.net_pnl:.2f}")
    print(f"Percent gain: {m.percent_gain:.2f}%")
    print(f"Trade risk: {m.trade_risk:.2f}")
    print(f"Realized R:R: {m.realized_reward_to_risk:.2f}")
    if m.result is not None:
        print(f"Result: {m.result.value}")
    if m.duration_minutes is not None:
        print(f"Duration: {m.duration_minutes} min")
    return 0


def run_portfolio(args: argparse.Namespace) -> int:
    """Portfolio metrics over a trade table, plus leaderboard score and optional breakdown."""
    config = load_config(args.config, ROOT)
    setup_logging(config.log_level, config.log_dir, config.log_file, console=not args.quiet)
    positions = positions_from_frame(read_table(args.file))
    m = compute_portfolio_metrics(positions, profit_factor_sentinel=config.profit_factor_sentinel)
    score = leaderboard_score(m, followers=args.followers, weights=config.leaderboard_weights)
    logger.info("Computed portfolio metrics for %d trades from %s", m.total_trades, args.file)
    print("\n--- Portfolio ---")
    print(f"Total trades: {m.total_trades} (wins: {m.winning_trades}, losses: {m.losing_trades})")
    print(f"Net P&L: {m.net_pnl:.2f}")
    print(f"Win rate: {m.win_rate:.1f}%")
    print(f"Profit factor: {m.profit_factor:.2f}")
    print(f"Avg winner / loser: {m.avg_winner:.2f} / {m.avg_loser:.2f}")
    print(f"Largest profit / loss: {m.largest_profit:.2f} / {abs(m.largest_loss):.2f}")
    print(f"Max drawdown: {m.max_drawdown:.2f}")
    print(f"Sharpe (per trade): {m.sharpe_ratio:.2f}")
    print(f"Expectancy: {m.expectancy:.2f}/trade")
    print(f"Total R:R: {m.total_reward_to_risk:.2f}")
    print(f"Leaderboard score: {score:.2f}")
    if args.group_by:
        table = group_breakdown(positions, key=args.group_by)
        print(f"\n--- By {args.group_by} ---")
        print(table.to_string(index=False) if not table.empty else "(no labelled trades)")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Trade journal CLI")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument("--quiet", action="store_true", help="Log to the file only, not the console")
    sub = parser.add_subparsers(dest="mode", required=True)

    pos = sub.add_parser("position", help="Aggregate fills into a position")
    pos.add_argument("file", type=Path, help="CSV/JSON of fills in entry order")
    pos.add_argument("--stop-loss", type=float, default=None)
    pos.add_argument("--multiplier", type=float, default=None, help="Contract multiplier")
    pos.add_argument("--direction", choices=[d.value for d in Direction], default=None)
    pos.set_defaults(func=run_position)

    port = sub.add_parser("portfolio", help="Portfolio metrics over closed trades")
    port.add_argument("file", type=Path, help="CSV/JSON with net_pnl per trade")
    port.add_argument("--group-by", choices=["strategy", "instrument", "account"], default=None)
    port.add_argument("--followers", type=int, default=0)
    port.set_defaults(func=run_portfolio)

    args = parser.parse_args()
    try:
        return args.func(args)
    except InvalidInput as e:
        logger.error("Invalid input: %s", e)
        return 1


if __name__ == "__main__":
    exit(main())
