import json
import logging
import os
import subprocess
import sys
import tempfile
from typing import Any

from app.settings import EXEC_TIMEOUT_SECONDS
from .base import HARNESS_PATH, CodeRunner, RunOutcome, parse_harness_output

logger = logging.getLogger(__name__)


class SubprocessRunner(CodeRunner):
    """Runs the harness in a child interpreter on this host.

    No isolation beyond a separate process and a wall-clock timeout; use
    DockerRunner when teams are not trusted.
    """

    def __init__(self, timeout: int = EXEC_TIMEOUT_SECONDS, python: str = sys.executable):
        self.timeout = timeout
        self.python = python

    def run(self, code: str, test_input: Any) -> RunOutcome:
        code_file = None
        try:
            with tempfile.NamedTemporaryFile(mode="w", suffix=".py", delete=False, encoding="utf-8") as f:
                f.write(code)
                code_file = f.name

            proc = subprocess.run(
                [self.python, "-I", str(HARNESS_PATH), code_file],
                input=json.dumps(test_input),
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
            return parse_harness_output(proc.stdout, proc.stderr)
        except subprocess.TimeoutExpired:
            logger.info(f"Submission timed out after {self.timeout}s")
            return RunOutcome(ok=False, error="Time Limit Exceeded")
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Subprocess runner failed: {e}")
            return RunOutcome(ok=False, error=str(e))
        finally:
            if code_file and os.path.exists(code_file):
                os.remove(code_file)
