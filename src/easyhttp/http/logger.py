"""
Line logger for HTTP request lifecycle events.

Each event becomes one line appended to a log file and, optionally, mirrored
to a live output stream:

    [2024-05-01 13:37:00] [DEBUG]: Response HTTP status code: 200
"""

import logging
import sys
import threading
from datetime import datetime
from pathlib import Path
from typing import Protocol
from typing import TextIO

DEFAULT_LOG_FILE = "HttpClient.log"

logger = logging.getLogger(__name__)


class HTTPLogger(Protocol):
    """Protocol for request lifecycle logging."""

    def log(self, message: str, level: str = "INFO") -> None:
        """Record a message at the given level."""
        ...

    def debug(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class FileHTTPLogger:
    """
    Appends timestamped, leveled lines to a file.

    Format:
        [timestamp] [LEVEL]: message

    Where:
        - timestamp: local wall-clock time, ``YYYY-MM-DD HH:MM:SS``
        - LEVEL: the level tag, upper-cased (INFO, DEBUG, WARNING, ERROR, ...)

    Writes never raise. If the file cannot be written, a warning goes to the
    standard ``logging`` module and the request carries on. One instance may
    be shared by several clients and by concurrent requests; each line is
    written whole.
    """

    def __init__(
        self,
        log_file: Path | str = DEFAULT_LOG_FILE,
        echo: bool = True,
        stream: TextIO | None = None,
    ):
        """
        Initialize the file logger.

        Args:
            log_file: Path to the log file. Parent directories are created
                      if they don't exist.
            echo: Mirror every line to ``stream``.
            stream: Live output for the mirror. Defaults to ``sys.stdout``,
                    looked up at write time.
        """
        self.log_file = Path(log_file)
        self.echo = echo
        self._stream = stream
        self._lock = threading.Lock()
        self._ensure_log_file()

    def _ensure_log_file(self) -> None:
        """Ensure the parent directories of the log file exist."""
        try:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Cannot create log directory for {self.log_file}: {e}")

    def _format_timestamp(self) -> str:
        return datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    def format_line(self, message: str, level: str = "INFO") -> str:
        """Render one log line, newline included."""
        return f"[{self._format_timestamp()}] [{level.upper()}]: {message}\n"

    def _write_log(self, line: str) -> None:
        """Append a line to the file and echo it."""
        with self._lock:
            try:
                with self.log_file.open("a", encoding="utf-8") as f:
                    f.write(line)
            except OSError as e:
                logger.warning(f"Cannot write to log file {self.log_file}: {e}")

            if self.echo:
                stream = self._stream or sys.stdout
                try:
                    stream.write(line)
                    stream.flush()
                except (OSError, ValueError) as e:
                    # Closed streams raise ValueError, broken pipes OSError
                    logger.warning(f"Cannot echo log line: {e}")

    def log(self, message: str, level: str = "INFO") -> None:
        self._write_log(self.format_line(message, level))

    def debug(self, message: str) -> None:
        self.log(message, "DEBUG")

    def info(self, message: str) -> None:
        self.log(message, "INFO")

    def warning(self, message: str) -> None:
        self.log(message, "WARNING")

    def error(self, message: str) -> None:
        self.log(message, "ERROR")


class NullHTTPLogger:
    """Logger that discards everything."""

    def log(self, message: str, level: str = "INFO") -> None:
        pass

    def debug(self, message: str) -> None:
        pass

    def info(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass
