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

"""Logging interface for the fcrepo client.

Builders and the client report what they send through a small logger
interface instead of printing directly, so library users stay in control of
output. The CLI installs a console logger; library code defaults to silence.

The logger supports two output levels:

- Verbose: Only printed when verbose mode is enabled (method, URI, status)
- Debug: Only printed when debug mode is enabled (request headers)

Example:
    Show request headers while experimenting:
        ```python
        from fcrepo.logging import get_logger, set_global_logger

        set_global_logger(get_logger(debug=True))
        client.post(container).slug("photo1").perform()
        # [HTTP] POST http://localhost:8080/rest/container
        # [HTTP] POST request headers: {'Slug': 'photo1'}
        ```

Note:
    Messages go to stderr so that `fcrepo get` can stream a body to stdout
    without interleaving diagnostics.
"""

from __future__ import annotations

import sys
from typing import Protocol, TextIO


class Logger(Protocol):
    """Protocol for logger implementations."""

    def verbose(self, prefix: str, message: str) -> None:
        """Print a verbose log message.

        Args:
            prefix: Message prefix (e.g., "HTTP", "CONFIG").
            message: Log message.
        """
        ...

    def debug(self, prefix: str, message: str) -> None:
        """Print a debug log message.

        Args:
            prefix: Message prefix (e.g., "HTTP", "CONFIG").
            message: Log message.
        """
        ...


class DefaultLogger:
    """Console logger honouring verbose and debug flags."""

    def __init__(
        self, verbose: bool = False, debug: bool = False, stream: TextIO | None = None
    ) -> None:
        """Initialize logger with verbosity settings.

        Args:
            verbose: If True, print verbose messages.
            debug: If True, print debug messages (implies verbose).
            stream: Output stream. Defaults to sys.stderr at write time.
        """
        self._verbose = verbose or debug
        self._debug = debug
        self._stream = stream

    def _write(self, text: str) -> None:
        print(text, file=self._stream or sys.stderr)

    def verbose(self, prefix: str, message: str) -> None:
        if self._verbose:
            self._write(f"[{prefix}] {message}")

    def debug(self, prefix: str, message: str) -> None:
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


def get_logger(verbose: bool = False, debug: bool = False) -> Logger:
    """Get a console logger with the specified verbosity.

    Args:
        verbose: If True, logger will print verbose messages.
        debug: If True, logger will print debug messages (implies verbose).

    Returns:
        A logger instance configured with the specified verbosity.
    """
    return DefaultLogger(verbose=verbose, debug=debug)


def get_global_logger() -> Logger:
    """Get the global logger instance (silent unless configured)."""
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Set the global logger instance.

    Args:
        logger: Logger instance to use as the global logger.

    Note:
        This affects every builder and client created in the process. Tests
        should restore the previous logger when they are done.
    """
    global _global_logger
    _global_logger = logger
