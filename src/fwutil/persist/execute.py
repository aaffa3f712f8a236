"""
External command execution.
"""

import logging
import subprocess
from typing import Callable, Sequence

from fwutil.errors import ExecutionFailure

logger = logging.getLogger(__name__)

Executor = Callable[[Sequence[str]], str]


def run_command(command: Sequence[str], timeout: float | None = None) -> str:
    """Run a command and return its stdout.

    Raises:
        ExecutionFailure: If the command cannot be started, times out or
            exits non-zero
    """
    command = list(command)
    logger.debug(f"Executing: {' '.join(command)}")

    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        raise ExecutionFailure(command, f"Execution of '{' '.join(command)}' timed out after {timeout}s")
    except OSError as e:
        raise ExecutionFailure(command, f"Execution of '{' '.join(command)}' failed: {e}")

    if result.returncode != 0:
        output = (result.stderr or result.stdout).strip()
        raise ExecutionFailure(
            command,
            f"Execution of '{' '.join(command)}' returned {result.returncode}: {output}",
            returncode=result.returncode,
            output=result.stdout,
        )

    return result.stdout
