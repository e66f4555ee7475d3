import json
import logging
import os
import tempfile
from typing import Any, Optional

import docker

from app.settings import EXEC_MEMORY_LIMIT_MB, EXEC_NETWORK_ACCESS, EXEC_TIMEOUT_SECONDS, SANDBOX_IMAGE
from .base import HARNESS_PATH, CodeRunner, RunOutcome, parse_harness_output

logger = logging.getLogger(__name__)


class DockerRunner(CodeRunner):
    """Runs the harness inside a throwaway container.

    The harness, the submission and the test input are bind-mounted read-only;
    the container has no network and a hard memory limit.
    """

    def __init__(
        self,
        image_name: str = SANDBOX_IMAGE,
        timeout: int = EXEC_TIMEOUT_SECONDS,
        memory_limit: int = EXEC_MEMORY_LIMIT_MB * 1024 * 1024,
        client=None,
    ):
        self.image_name = image_name
        self.timeout = timeout
        self.memory_limit = memory_limit
        self.use_docker = False
        self.client = client

        try:
            if self.client is None:
                self.client = docker.from_env()
            self.client.ping()
            self.use_docker = True
            logger.info("Docker daemon connected successfully. Using Docker for sandbox.")
            self._ensure_image()
        except Exception as e:
            logger.warning(f"Could not connect to Docker daemon: {e}")
            self.use_docker = False

    def _ensure_image(self):
        try:
            self.client.images.get(self.image_name)
            logger.info(f"Image {self.image_name} found")
        except docker.errors.ImageNotFound:
            logger.warning(f"Image {self.image_name} not found. In production, ensure image is pulled.")

    def cleanup_stale_containers(self):
        if not self.use_docker:
            return
        try:
            containers = self.client.containers.list(all=True, filters={"ancestor": self.image_name})
            for container in containers:
                container.remove(force=True)
        except docker.errors.DockerException as e:
            logger.warning(f"Failed to clean up sandbox containers: {e}")

    def run(self, code: str, test_input: Any) -> RunOutcome:
        if not self.use_docker:
            return RunOutcome(ok=False, error="No execution environment available (Docker daemon unreachable).")

        container = None
        code_file: Optional[str] = None
        input_file: Optional[str] = None
        try:
            with tempfile.NamedTemporaryFile(mode="w", suffix=".py", delete=False, encoding="utf-8") as f:
                f.write(code)
                code_file = f.name
            with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False, encoding="utf-8") as f:
                json.dump(test_input, f)
                input_file = f.name

            container = self.client.containers.run(
                self.image_name,
                ["python", "-I", "/sandbox/run_code.py", "/sandbox/code.py", "/sandbox/input.json"],
                volumes={
                    str(HARNESS_PATH): {"bind": "/sandbox/run_code.py", "mode": "ro"},
                    code_file: {"bind": "/sandbox/code.py", "mode": "ro"},
                    input_file: {"bind": "/sandbox/input.json", "mode": "ro"},
                },
                tty=False,
                cpu_period=100000,
                cpu_quota=50000,
                mem_limit=self.memory_limit,
                memswap_limit=self.memory_limit,
                network_disabled=not EXEC_NETWORK_ACCESS,
                detach=True,
                remove=False,
            )

            try:
                container.wait(timeout=self.timeout)
            except Exception:
                # docker-py surfaces the timeout as a requests ConnectionError
                container.kill()
                logger.info(f"Submission timed out after {self.timeout}s")
                return RunOutcome(ok=False, error="Time Limit Exceeded")

            stdout = container.logs(stdout=True, stderr=False).decode("utf-8", errors="replace")
            stderr = container.logs(stdout=False, stderr=True).decode("utf-8", errors="replace")
            return parse_harness_output(stdout, stderr)
        except docker.errors.DockerException as e:
            logger.warning(f"Docker run failed: {e}")
            return RunOutcome(ok=False, error=str(e))
        finally:
            if container is not None:
                try:
                    container.remove(force=True)
                except docker.errors.DockerException:
                    logger.warning("Failed to remove sandbox container")
            for path in (code_file, input_file):
                if path and os.path.exists(path):
                    os.remove(path)
