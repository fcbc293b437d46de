"""
Base class for code formatters.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod

from ..config import FormatterConfig


class Formatter(ABC):
    """Abstract base class for code formatters."""

    @abstractmethod
    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format the given code.

        Implementations return the input unchanged when formatting fails.

        Args:
            code: The source code to format
            config: Formatter configuration

        Returns:
            Formatted code
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if the formatter is available (dependencies installed).

        Returns:
            True if the formatter can be used
        """

    async def format_async(self, code: str, config: FormatterConfig) -> str:
        """Format in a worker thread so several documents can be formatted at once."""
        return await asyncio.to_thread(self.format, code, config)
