"""
JSON output envelope for CLI commands.

Every `--json` invocation prints exactly one document:
    {"command": ..., "status": "success", "data": {...}}
or
    {"command": ..., "status": "error", "error": {"type": ..., "message": ...}}
"""

import io
import json
import logging
from contextlib import contextmanager, redirect_stdout
from typing import Any, Dict, Iterator

import click
from pydantic import BaseModel

from ..core.exceptions import ReftreeError

logger = logging.getLogger(__name__)


class JsonRenderer:
    """Formats command results into the JSON envelope."""

    def __init__(self, command: str):
        self.command = command
        self._captured = io.StringIO()

    @contextmanager
    def capture(self) -> Iterator[None]:
        """Swallow stray stdout so the envelope stays the only output."""
        with redirect_stdout(self._captured):
            yield
        stray = self._captured.getvalue()
        if stray:
            logger.debug(f"Suppressed {len(stray)} chars of non-JSON output")

    def render_success(self, data: BaseModel) -> None:
        self._emit({
            "command": self.command,
            "status": "success",
            "data": data.model_dump(mode="json"),
        })

    def render_error(self, error: Exception) -> None:
        payload: Dict[str, Any] = {
            "type": type(error).__name__,
            "message": str(error),
        }
        node_id = getattr(error, "node_id", None)
        if node_id is not None:
            payload["node_id"] = node_id
        if not isinstance(error, ReftreeError):
            logger.debug("Unexpected error in JSON mode", exc_info=error)
        self._emit({"command": self.command, "status": "error", "error": payload})

    @staticmethod
    def _emit(document: Dict[str, Any]) -> None:
        click.echo(json.dumps(document, indent=2))
