"""Code execution services

- SubprocessRunner: runs submissions in a child interpreter (default)
- DockerRunner: runs submissions in a Docker container
"""
from .base import CodeRunner, RunOutcome
from .docker_manager import DockerRunner
from .subprocess_runner import SubprocessRunner


def get_runner(backend: str = "subprocess") -> CodeRunner:
    if backend == "docker":
        return DockerRunner()
    if backend == "subprocess":
        return SubprocessRunner()
    raise ValueError(f"Unknown execution backend: {backend}")


__all__ = [
    'CodeRunner',
    'RunOutcome',
    'DockerRunner',
    'SubprocessRunner',
    'get_runner',
]
