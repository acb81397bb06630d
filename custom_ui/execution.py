"""Async command execution utilities."""

import asyncio
import logging
from pathlib import Path
from typing import Tuple

_logging = logging.getLogger(__name__)


async def run_command_async(
    command: str,
    cwd: Path | str | None = None,
    timeout: float | None = None,
) -> Tuple[str, int]:
    """Run a shell command and return its combined output and return code.

    ``timeout=None`` waits for the process to exit however long it takes;
    package manager installs run that way.
    """
    process = None
    try:
        _logging.debug(f"Running command: {command} (cwd={cwd or '.'})")
        process = await asyncio.create_subprocess_shell(
            command,
            cwd=str(cwd) if cwd is not None else None,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(), timeout=timeout
            )
        except asyncio.TimeoutError:
            process.kill()
            _ = await process.wait()
            _logging.error(f"Command timed out after {timeout} seconds: {command}")
            return f"Command timed out after {timeout} seconds", 1

        output = stdout.decode().strip()
        if stderr:
            err_text = stderr.decode().strip()
            _logging.debug(f"stderr: {err_text}")
            if process.returncode and not output:
                output = err_text
        return output, process.returncode if process.returncode is not None else 1
    except OSError as e:
        _logging.error(f"Command execution failed: {type(e).__name__}: {e} | Command: {command}")
        return f"Error: {str(e)}", 1
    finally:
        if process:
            transport = getattr(process, "_transport", None)
            if transport:
                transport.close()
