"""
Logging setup shared by the API and the CLI.

Processing classes take an injected logger; anything with
log(level, message) works (logging.Logger, LoggerAdapter, test doubles).
"""

import logging
import sys
from typing import Any, Protocol

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class StructuredLogger(Protocol):
    """Minimal logging capability used by the processing pipeline."""

    def log(self, level: int, msg: str, *args: Any, **kwargs: Any) -> Any:
        ...


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging to stdout."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )
