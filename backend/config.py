"""
Runtime settings for the training lab.

Every value can be overridden with an environment variable of the same name.
SCENARIOS_SOURCE may be a local path or an http(s) URL.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path

DATA_DIR = Path(__file__).resolve().parent / "data"

SCENARIOS_SOURCE = os.environ.get("SCENARIOS_SOURCE", str(DATA_DIR / "scenarios.json"))
SCENARIOS_TIMEOUT_SECONDS = float(os.environ.get("SCENARIOS_TIMEOUT_SECONDS", "10"))
DEFAULT_LENS = os.environ.get("DEFAULT_LENS", "fraud")
GRAPH_HEIGHT_PX = int(os.environ.get("GRAPH_HEIGHT_PX", "560"))
COPY_ACK_MS = int(os.environ.get("COPY_ACK_MS", "1200"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


def configure_logging(level: str | None = None) -> None:
    """Install a basic stderr handler once per process."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
