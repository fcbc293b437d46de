"""
Prettier formatter for TypeScript code.
"""

from __future__ import annotations

import logging
import shutil
import subprocess

from ..config import FormatterConfig
from .base import Formatter

logger = logging.getLogger(__name__)


class PrettierFormatter(Formatter):
    """Formatter using the prettier executable for TypeScript code."""

    def __init__(self, executable: str = "prettier"):
        self.executable = executable
        self._available = None

    def is_available(self) -> bool:
        """Check if prettier is installed. Probed once, then cached."""
        if self._available is None:
            if shutil.which(self.executable) is None:
                self._available = False
            else:
                try:
                    result = subprocess.run(
                        [self.executable, "--version"],
                        capture_output=True,
                        text=True,
                        timeout=5,
                    )
                    self._available = result.returncode == 0
                except (subprocess.SubprocessError, OSError):
                    self._available = False
            logger.debug("prettier available: %s", self._available)
        return self._available

    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format TypeScript code using prettier.

        Args:
            code: TypeScript source code to format
            config: Formatter configuration

        Returns:
            Formatted code, or the original code if prettier is missing or fails
        """
        if not self.is_available():
            return code

        cmd = [
            self.executable,
            "--parser",
            "typescript",
            "--print-width",
            str(config.print_width),
            "--tab-width",
            str(config.tab_width),
            "--trailing-comma",
            "all",
            "--no-single-quote",
            "--semi",
        ]

        try:
            result = subprocess.run(
                cmd,
                input=code,
                capture_output=True,
                text=True,
                timeout=config.timeout,
            )
        except (subprocess.SubprocessError, OSError) as e:
            logger.debug("prettier failed, keeping unformatted code: %s", e)
            return code

        if result.returncode != 0:
            logger.debug("prettier exited with %d: %s", result.returncode, result.stderr.strip())
            return code
        return result.stdout


def format_with_prettier(code: str, print_width: int = 80) -> str:
    """
    Convenience function to format TypeScript code with prettier.

    Args:
        code: TypeScript source code
        print_width: Maximum line width

    Returns:
        Formatted code
    """
    formatter = PrettierFormatter()
    config = FormatterConfig(enabled=True, print_width=print_width)
    return formatter.format(code, config)
