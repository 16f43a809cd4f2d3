"""Base class for probing tools."""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import Any, ClassVar

from ffprint.errors import ProbeFailed

logger = logging.getLogger(__name__)


def run_tool(cmd: list[str], name: str | None = None, timeout: float | None = 60) -> str:
    """Run an external tool and return its stdout.

    Raises:
        ProbeFailed: If the tool cannot be run, times out or exits non-zero
    """
    name = name or cmd[0]
    logger.debug("Running %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except FileNotFoundError as e:
        raise ProbeFailed(f"{name} not found: {cmd[0]}") from e
    except subprocess.TimeoutExpired as e:
        raise ProbeFailed(f"{name} timed out after {timeout}s") from e
    except OSError as e:
        raise ProbeFailed(f"Cannot run {name}: {e}") from e
    if result.returncode != 0:
        detail = result.stderr.strip() or f"exit code {result.returncode}"
        raise ProbeFailed(f"{name} failed: {detail}")
    return result.stdout


class BaseProbe(ABC):
    """Abstract base class for external probing tools.

    A probe runs one external program against a media file and returns its
    JSON output as a dict, normalized for hashing.

    Attributes:
        name: Human-readable name of the probe
        executable: Path or name of the program to run
        timeout: Seconds to wait for the program (None waits forever)
    """

    name: ClassVar[str] = "base"

    def __init__(self, executable: str, timeout: float | None = 60) -> None:
        self.executable = executable
        self.timeout = timeout

    def is_available(self) -> bool:
        """Check if the probe's executable can be found."""
        return shutil.which(self.executable) is not None

    @abstractmethod
    def probe(self, path: str) -> dict[str, Any]:
        """Probe a media file.

        Args:
            path: Path to the media file

        Returns:
            Normalized JSON output of the tool

        Raises:
            ProbeFailed: If the tool fails or returns invalid output
        """
        pass

    def _run_json(self, args: list[str]) -> dict[str, Any]:
        """Run the executable and parse its stdout as a JSON object."""
        output = run_tool([self.executable, *args], self.name, self.timeout)
        try:
            data = json.loads(output)
        except json.JSONDecodeError as e:
            raise ProbeFailed(f"{self.name} returned invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ProbeFailed(f"{self.name} returned {type(data).__name__}, expected an object")
        return data

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, executable={self.executable!r})"
