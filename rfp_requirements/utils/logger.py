"""Centralized logging configuration.
Call setup_logging() once at application startup.
"""

from __future__ import annotations

import io
import logging
import sys

# HTTP, LLM-client and upload-parser chatter below WARNING is dropped
_QUIET_LOGGERS = ("httpx", "httpcore", "groq", "langchain_groq", "multipart", "uvicorn.access")


def setup_logging(level: str = "INFO") -> None:
    """Configure console logging for extraction runs and the API."""
    root = logging.getLogger()
    # Avoid duplicate handlers on repeated calls
    if root.handlers:
        return

    log_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(log_level)

    # UTF-8 wrapper so section titles with bullets/dashes print on any console
    stream = io.TextIOWrapper(
        sys.stdout.buffer, encoding="utf-8", errors="replace", line_buffering=True
    )
    handler = logging.StreamHandler(stream)
    handler.setLevel(log_level)

    formatter = logging.Formatter(
        fmt="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(funcName)s:%(lineno)d │ %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)
    root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("rfp_requirements").setLevel(log_level)
