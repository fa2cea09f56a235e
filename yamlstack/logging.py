# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Logging interface for yamlstack.

Library modules report progress through a small logger protocol instead of
the CLI. A logger is passed to a component at construction; when none is
given the component falls back to the global logger, which is silent until
the CLI (or an application) installs another one.

Output levels:

- Verbose: Printed when verbose mode is enabled
- Debug: Printed when debug mode is enabled (implies verbose)

Example:
    Configure the global logger:
        ```python
        from yamlstack.logging import get_logger, set_global_logger

        set_global_logger(get_logger(verbose=True))
        ```

    Pass a logger to a merger:
        ```python
        from yamlstack.logging import get_logger
        from yamlstack.merger import MultipleConfigurationMerger

        merger = MultipleConfigurationMerger(logger=get_logger(debug=True))
        ```
"""

from __future__ import annotations

import sys
from typing import Protocol, TextIO


class Logger(Protocol):
    """Protocol for logger implementations."""

    def verbose(self, prefix: str, message: str) -> None:
        """Print a verbose log message.

        Args:
            prefix: Message prefix (e.g., "MERGE", "READ").
            message: Log message.
        """
        ...

    def debug(self, prefix: str, message: str) -> None:
        """Print a debug log message.

        Args:
            prefix: Message prefix (e.g., "MERGE", "HTTP").
            message: Log message.
        """
        ...


class DefaultLogger:
    """Logger that writes ``[PREFIX] message`` lines to a text stream.

    The CLI points this at stderr so that merged YAML written to stdout
    stays pipeable.
    """

    def __init__(
        self,
        verbose: bool = False,
        debug: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        """Initialize logger with verbosity settings.

        Args:
            verbose: If True, print verbose messages.
            debug: If True, print debug messages (implies verbose).
            stream: Destination stream. Defaults to sys.stdout, looked up at
                write time so pytest's capture works.
        """
        self._verbose = verbose or debug
        self._debug = debug
        self._stream = stream

    def _write(self, line: str) -> None:
        print(line, file=self._stream or sys.stdout)

    def verbose(self, prefix: str, message: str) -> None:
        """Print a verbose log message (only when verbose mode is active)."""
        if self._verbose:
            self._write(f"[{prefix}] {message}")

    def debug(self, prefix: str, message: str) -> None:
        """Print a debug log message (only when debug mode is active)."""
        if self._debug:
            self._write(f"[{prefix}] {message}")


class SilentLogger:
    """Logger that suppresses all output."""

    def verbose(self, prefix: str, message: str) -> None:
        pass

    def debug(self, prefix: str, message: str) -> None:
        pass


# Global logger instance (defaults to silent)
_global_logger: Logger = SilentLogger()


def get_logger(
    verbose: bool = False, debug: bool = False, stream: TextIO | None = None
) -> Logger:
    """Get a logger instance with specified verbosity.

    Args:
        verbose: If True, logger will print verbose messages.
        debug: If True, logger will print debug messages (implies verbose).
        stream: Optional destination stream (default: stdout).

    Returns:
        A DefaultLogger configured with the specified verbosity.
    """
    return DefaultLogger(verbose=verbose, debug=debug, stream=stream)


def get_global_logger() -> Logger:
    """Get the global logger instance.

    Returns:
        The current global logger instance (silent unless replaced).
    """
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Set the global logger instance.

    Args:
        logger: Logger instance used by components constructed without an
            explicit logger.

    Note:
        Components resolve the global logger when they are constructed, so
        set it before building a MultipleConfigurationMerger.
    """
    global _global_logger
    _global_logger = logger
