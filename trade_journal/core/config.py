"""
Load configuration from config.yaml and .env. Environment wins over the file.
"""

from __future__ import annotations
import logging
import math
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from trade_journal.core.types import LeaderboardWeights

DEFAULT_PROFIT_FACTOR_SENTINEL = 999.0

logger = logging.getLogger("trade_journal.config")


def _project_root(project_root: Optional[Path] = None) -> Path:
    return project_root or Path(__file__).resolve().parents[2]


def load_dotenv_if_exists(project_root: Optional[Path] = None) -> None:
    """Load .env from project root if present."""
    path = _project_root(project_root) / ".env"
    if path.exists():
        load_dotenv(path)


def env(key: str, default: str = "") -> str:
    return os.getenv(key, default).strip()


def env_float(key: str, default: float = 0.0) -> float:
    try:
        return float(os.getenv(key, str(default)))
    except ValueError:
        return default


def _finite_sentinel(value: float) -> float:
    if not math.isfinite(value):
        logger.warning(
            "profit_factor_sentinel %r is not finite; using %s", value, DEFAULT_PROFIT_FACTOR_SENTINEL
        )
        return DEFAULT_PROFIT_FACTOR_SENTINEL
    return value


def load_config(config_path: Optional[Path] = None, project_root: Optional[Path] = None) -> "Config":
    """Load config.yaml and overlay with env. Returns Config."""
    load_dotenv_if_exists(project_root)
    root = _project_root(project_root)
    path = config_path or root / "config.yaml"
    data: dict[str, Any] = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    logging_cfg = data.get("logging", {}) or {}
    analytics = data.get("analytics", {}) or {}
    leaderboard = data.get("leaderboard", {}) or {}
    defaults = LeaderboardWeights()

    weights = LeaderboardWeights(
        win_rate=env_float("LEADERBOARD_WIN_RATE_WEIGHT", leaderboard.get("win_rate", defaults.win_rate)),
        profit_factor=env_float(
            "LEADERBOARD_PROFIT_FACTOR_WEIGHT", leaderboard.get("profit_factor", defaults.profit_factor)
        ),
        net_pnl=env_float("LEADERBOARD_NET_PNL_WEIGHT", leaderboard.get("net_pnl", defaults.net_pnl)),
        followers=env_float("LEADERBOARD_FOLLOWERS_WEIGHT", leaderboard.get("followers", defaults.followers)),
    )

    return Config(
        log_level=env("LOG_LEVEL", str(logging_cfg.get("level", "INFO"))).upper(),
        log_dir=Path(logging_cfg.get("log_dir", "logs")),
        log_file=logging_cfg.get("log_file", "trade_journal.log"),
        # Must stay finite: it is serialized alongside the other metrics
        profit_factor_sentinel=_finite_sentinel(env_float(
            "PROFIT_FACTOR_SENTINEL", analytics.get("profit_factor_sentinel", DEFAULT_PROFIT_FACTOR_SENTINEL)
        )),
        default_contract_multiplier=env_float(
            "CONTRACT_MULTIPLIER", analytics.get("contract_multiplier", 1.0)
        ),
        leaderboard_weights=weights,
    )


class Config:
    """Unified configuration. Immutable after load."""

    __slots__ = (
        "log_level", "log_dir", "log_file",
        "profit_factor_sentinel", "default_contract_multiplier",
        "leaderboard_weights",
    )

    def __init__(
        self,
        log_level: str = "INFO",
        log_dir: Optional[Path] = None,
        log_file: str = "trade_journal.log",
        profit_factor_sentinel: float = DEFAULT_PROFIT_FACTOR_SENTINEL,
        default_contract_multiplier: float = 1.0,
        leaderboard_weights: Optional[LeaderboardWeights] = None,
    ):
        self.log_level = log_level
        self.log_dir = Path(log_dir) if log_dir else Path("logs")
        self.log_file = log_file
        self.profit_factor_sentinel = profit_factor_sentinel
        self.default_contract_multiplier = default_contract_multiplier
        self.leaderboard_weights = leaderboard_weights or LeaderboardWeights()
