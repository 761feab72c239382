"""
Invocation of the demo operations scripts.

Scripts are started with an argument vector, never through a shell, so
connection strings and feature names reach them verbatim.
"""
import asyncio
from pathlib import Path
from typing import Optional

import structlog

from shared.config.settings import SCRIPT_TIMEOUT_SECONDS
from shared.observability import ecomm_demo_script_runs_total

logger = structlog.get_logger(__name__)


class ScriptExecutionError(Exception):
    def __init__(self, message: str, output: str = ""):
        super().__init__(message)
        self.output = output


class ScriptRunner:
    def __init__(self, timeout: float = SCRIPT_TIMEOUT_SECONDS):
        self.timeout = timeout

    async def run(self, *args: str, cwd: Optional[Path] = None) -> str:
        """Runs ``args`` and returns its stdout. Raises ScriptExecutionError on failure."""
        command = Path(args[0]).name
        logger.info("script_started", command=command, args=list(args[1:]), cwd=str(cwd))
        try:
            proc = await asyncio.create_subprocess_exec(
                *args,
                cwd=cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            ecomm_demo_script_runs_total.labels(command=command, status="failed").inc()
            logger.error("script_not_started", command=command, error=str(e))
            raise ScriptExecutionError(f"Could not start {command}: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), self.timeout)
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            ecomm_demo_script_runs_total.labels(command=command, status="timeout").inc()
            logger.error("script_timed_out", command=command, timeout=self.timeout)
            raise ScriptExecutionError(f"{command} timed out after {self.timeout}s")

        output = stdout.decode(errors="replace")
        if proc.returncode != 0:
            ecomm_demo_script_runs_total.labels(command=command, status="failed").inc()
            message = stderr.decode(errors="replace").strip() or f"{command} exited with {proc.returncode}"
            logger.error("script_failed", command=command, returncode=proc.returncode, error=message)
            raise ScriptExecutionError(message, output=output)

        ecomm_demo_script_runs_total.labels(command=command, status="success").inc()
        logger.info("script_finished", command=command)
        return output


def get_script_runner() -> ScriptRunner:
    return ScriptRunner()
