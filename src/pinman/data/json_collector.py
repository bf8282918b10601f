# Author: PB
# Maintainer: PB
# Original date: 2026.10.19
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# src/pinman/data/json_collector.py

from datetime import datetime
from pathlib import Path
from typing import Any

import orjson
from pydantic import BaseModel


def _default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    if hasattr(value, 'to_dict') and callable(value.to_dict):
        return value.to_dict()
    return str(value)


class JSONCollector:
    """Collects structured data from CLI commands for scripting.

    When enabled, captures operation results and metadata as JSON.
    When disabled, all methods are no-ops.
    """

    def __init__(self, enabled: bool = False) -> None:
        self.enabled = enabled
        self.data = {} if enabled else None

    def capture_success(self, result: Any) -> None:
        """Capture successful operation data."""
        if not self.enabled:
            return

        self.data["status"] = "success"
        self.data["timestamp"] = datetime.now().isoformat()
        if result is not None:
            self.data["result"] = result

    def capture_error(self, error: Exception) -> None:
        """Capture error operation data."""
        if not self.enabled:
            return

        self.data["status"] = "error"
        self.data["timestamp"] = datetime.now().isoformat()
        self.data["error"] = str(error)
        self.data["error_type"] = type(error).__name__

    def record(self, key: str, value: Any) -> None:
        if not self.enabled:
            return

        self.data[key] = value

    def to_json(self) -> str:
        return orjson.dumps(self.data, default=_default, option=orjson.OPT_INDENT_2).decode()

    def output(self) -> None:
        """Output collected JSON data to stdout if enabled."""
        if not self.enabled:
            return

        print(f"<JSON-STDOUT>{self.to_json()}</JSON-STDOUT>")
