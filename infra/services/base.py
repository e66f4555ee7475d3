"""Shared pieces of the code runners."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

# Script that loads a submission, calls its entry point and prints a JSON verdict.
HARNESS_PATH = Path(__file__).resolve().parents[2] / "sandbox" / "run_code.py"


@dataclass
class RunOutcome:
    ok: bool
    output: Any = None
    error: Optional[str] = None


class CodeRunner(ABC):

    @abstractmethod
    def run(self, code: str, test_input: Any) -> RunOutcome:
        """Execute `code` on one test input. Must not raise."""


def parse_harness_output(stdout: str, stderr: Optional[str] = None) -> RunOutcome:
    """Read the JSON verdict the harness writes as its last stdout line."""
    lines = [line for line in (stdout or "").splitlines() if line.strip()]
    if not lines:
        detail = (stderr or "").strip().splitlines()
        return RunOutcome(ok=False, error=detail[-1] if detail else "No result produced")
    try:
        data = json.loads(lines[-1])
    except json.JSONDecodeError:
        return RunOutcome(ok=False, error="Malformed result from sandbox")
    if not isinstance(data, dict) or "ok" not in data:
        return RunOutcome(ok=False, error="Malformed result from sandbox")
    if data["ok"]:
        return RunOutcome(ok=True, output=data.get("output"))
    return RunOutcome(ok=False, error=data.get("error") or "Runtime error")
