"""
System Capabilities
===================

Best-effort wrappers around external desktop tools. Each capability can be
probed with ``available()`` and invoked with ``apply()``; failures are logged
and returned as a CapabilityResult, never raised.
"""

import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class CapabilityResult:
    """Outcome of an external tool invocation."""

    success: bool
    message: str = ""


class SystemCapability(ABC):
    """Abstract base class for an optional external tool."""

    executable: str = ""
    timeout_seconds: float = 60.0

    def __init__(self, executable: str | None = None, timeout_seconds: float | None = None):
        if executable is not None:
            self.executable = executable
        if timeout_seconds is not None:
            self.timeout_seconds = timeout_seconds

    def _resolve(self) -> str | None:
        return shutil.which(self.executable)

    def available(self) -> bool:
        """Check whether the tool is on PATH."""
        return self._resolve() is not None

    @abstractmethod
    def apply(self, *args, **kwargs) -> CapabilityResult:
        """Invoke the tool; failures are returned, never raised."""

    def _run(self, args: list[str]) -> CapabilityResult:
        """Run the tool with ``args``; non-zero exits become failed results."""
        path = self._resolve()
        if not path:
            logger.warning(f"{self.executable} not found in PATH")
            return CapabilityResult(False, f"{self.executable} not found")

        command = [path, *args]
        logger.debug(f"Running {' '.join(command)}")

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning(f"{self.executable} failed: {e}")
            return CapabilityResult(False, str(e))

        if result.returncode != 0:
            message = (result.stderr or result.stdout or "").strip()
            logger.warning(f"{self.executable} exited with {result.returncode}: {message}")
            return CapabilityResult(False, message or f"exit status {result.returncode}")

        return CapabilityResult(True, (result.stdout or "").strip())


class FontCacheRefresher(SystemCapability):
    """Rebuilds the fontconfig cache with ``fc-cache``."""

    executable = "fc-cache"

    def apply(self, dest_dir: Path | None = None) -> CapabilityResult:
        """
        Refresh the cache for ``dest_dir``, falling back to a full refresh.

        Args:
            dest_dir: Directory that just received new fonts

        Returns:
            CapabilityResult of the last attempt
        """
        if not self.available():
            logger.warning(f"{self.executable} not found in PATH, skipping font cache refresh")
            return CapabilityResult(False, f"{self.executable} not found")

        if dest_dir is not None:
            result = self._run(["-fv", str(dest_dir)])
            if result.success:
                logger.info("Refreshed fontconfig cache")
                return result

        result = self._run(["-fv"])
        if result.success:
            logger.info("Refreshed fontconfig cache")
        return result


class DesktopFontSetter(SystemCapability):
    """Sets the GNOME interface and monospace fonts with ``gsettings``."""

    executable = "gsettings"
    schema = "org.gnome.desktop.interface"
    keys = ("font-name", "monospace-font-name")

    def apply(self, family: str, size: int = 11) -> CapabilityResult:
        """
        Set both desktop font keys to ``"<family> <size>"``.

        Both keys are attempted even if the first one fails.
        """
        if not self.available():
            logger.warning(
                f"{self.executable} not found, cannot set desktop font defaults automatically"
            )
            return CapabilityResult(False, f"{self.executable} not found")

        value = f"{family} {size}"
        failures = []
        for key in self.keys:
            result = self._run(["set", self.schema, key, value])
            if not result.success:
                failures.append(f"{key}: {result.message}")

        if failures:
            return CapabilityResult(False, "; ".join(failures))

        logger.info(f"Set desktop fonts to '{value}'")
        return CapabilityResult(True, value)
