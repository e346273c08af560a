"""Shared utilities for CLI commands (no click imports)."""

from __future__ import annotations
import json
from pathlib import Path
from typing import Any

from ..db import RecordStore


def get_store(cfg) -> RecordStore:
    """Get record store instance from config.

    Args:
        cfg: Configuration dictionary

    Returns:
        RecordStore instance
    """
    return RecordStore(Path(cfg["database"]["path"]))


def parse_cli_value(raw: str) -> Any:
    """Interpret a command-line value as JSON when possible, else as text."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def dump_json(data: Any, pretty: bool = False) -> str:
    # Dates, UUIDs and other non-JSON kinds are rendered as text
    return json.dumps(data, default=str, ensure_ascii=False, indent=2 if pretty else None)


__all__ = ["get_store", "parse_cli_value", "dump_json"]
