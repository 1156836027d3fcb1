"""
Command execution seam.

The listing and info sources hand their diskutil argv to an executor instead of
calling subprocess, so tests answer with canned plists and never touch the host.
"""

import subprocess
from dataclasses import dataclass
from typing import List, Optional, Protocol

DEFAULT_TIMEOUT = 300
# diskutil writes UTF-8 plists regardless of the caller's locale
OUTPUT_ENCODING = "utf-8"


@dataclass
class RunResult:
    """Captured outcome of one command."""

    stdout: str
    stderr: str
    returncode: int


class Executor(Protocol):
    """Anything callable with an argv that yields a RunResult."""

    def __call__(self, cmd: List[str]) -> RunResult:
        ...


def _decode_stdout(data: Optional[bytes]) -> str:
    """UTF-8 with surrogateescape: undecodable bytes survive to the plist parser unchanged."""
    return (data or b"").decode(OUTPUT_ENCODING, errors="surrogateescape")


def _decode_stderr(data: Optional[bytes]) -> str:
    return (data or b"").decode(OUTPUT_ENCODING, errors="replace")


def subprocess_executor(cmd: List[str], timeout: float = DEFAULT_TIMEOUT) -> RunResult:
    """
    Run cmd with no stdin. Output is captured as bytes and decoded here, never
    with the locale encoding. Timeouts map to -1, a missing binary to 127 and
    any other exec failure (permissions, bad interpreter) to 126.
    """
    try:
        proc = subprocess.run(
            cmd,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        return RunResult(
            stdout=_decode_stdout(e.stdout),
            stderr=f"{cmd[0]} timed out after {e.timeout}s",
            returncode=-1,
        )
    except FileNotFoundError:
        return RunResult(stdout="", stderr=f"{cmd[0]}: command not found", returncode=127)
    except OSError as e:
        return RunResult(stdout="", stderr=f"{cmd[0]}: {e.strerror or e}", returncode=126)
    return RunResult(
        stdout=_decode_stdout(proc.stdout),
        stderr=_decode_stderr(proc.stderr),
        returncode=proc.returncode,
    )


def make_executor(timeout: float = DEFAULT_TIMEOUT) -> Executor:
    """Default executor bound to a per-command timeout."""
    def run(cmd: List[str]) -> RunResult:
        return subprocess_executor(cmd, timeout=timeout)
    return run
