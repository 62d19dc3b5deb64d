"""GitHub Actions runner I/O: inputs, outputs, failure signalling.

Inputs arrive as ``INPUT_<NAME>`` environment variables (name upper-cased,
spaces replaced by underscores). Outputs are appended to the file named by
``GITHUB_OUTPUT``; outside a runner they are printed instead.
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from collections.abc import Mapping
from typing import Optional, TextIO

logger = logging.getLogger(__name__)


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def get_input(name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Value of an action input, stripped; empty string when unset."""
    env = os.environ if environ is None else environ
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    raw = env.get(key)
    if raw is None:
        # Composite actions and local runs often pass inputs with underscores.
        raw = env.get(key.replace("-", "_"), "")
    return raw.strip()


class ActionRuntime:
    def __init__(self, environ: Optional[Mapping[str, str]] = None, stream: Optional[TextIO] = None) -> None:
        self._environ = os.environ if environ is None else environ
        self._stream = stream
        self.outputs: dict[str, str] = {}
        self.exit_code = 0
        self.failure_message: Optional[str] = None

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def _command(self, command: str, message: str) -> None:
        print(f"::{command}::{_escape_data(message)}", file=self.stream, flush=True)

    def set_output(self, name: str, value: str) -> None:
        self.outputs[name] = value
        output_path = (self._environ.get("GITHUB_OUTPUT") or "").strip()
        if not output_path:
            print(f"{name}={value}", file=self.stream, flush=True)
            return
        with open(output_path, "a", encoding="utf-8") as f:
            if "\n" in value:
                delimiter = f"ghadelimiter_{uuid.uuid4().hex}"
                f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
            else:
                f.write(f"{name}={value}\n")
        logger.debug("output %s set", name)

    def error(self, message: str) -> None:
        self._command("error", message)

    def set_failed(self, message: str) -> None:
        """Mark the run failed: error annotation now, exit code 1 at the end."""
        self.exit_code = 1
        self.failure_message = message
        self.error(message)
