"""Command execution tool (no shell; argv is passed straight to exec)."""

import asyncio
import logging
import time
from pathlib import Path
from typing import Any

from src.core.errors import ToolError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30_000


async def execute_command(
    command: str,
    args: list[str] | None = None,
    *,
    cwd: str | None = None,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> dict[str, Any]:
    """Run ``command args...`` and capture its output.

    A non-zero exit code is reported, not raised. Spawn failures and
    timeouts raise ToolError; the child is killed on timeout.
    """
    if not command:
        msg = "Error: Invalid input. Expected { command: string }."
        raise ToolError(msg)

    workdir = Path(cwd) if cwd else Path.cwd()
    started = time.monotonic()

    logger.info("Executing %s %s (cwd=%s)", command, " ".join(args or []), workdir)
    try:
        proc = await asyncio.create_subprocess_exec(
            command,
            *(args or []),
            cwd=workdir,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        msg = f"Error executing command: {e}"
        raise ToolError(msg) from e

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout_ms / 1000)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.wait()
        msg = f"Error executing command: timed out after {timeout_ms}ms"
        raise ToolError(msg) from None

    return {
        "stdout": stdout.decode(errors="replace"),
        "stderr": stderr.decode(errors="replace"),
        "exitCode": proc.returncode if proc.returncode is not None else 0,
        "duration": round((time.monotonic() - started) * 1000),
    }
