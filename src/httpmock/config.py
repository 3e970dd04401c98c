"""
=============================================================================
MOCK RESPONSE CONFIGURATION
=============================================================================

Defaults applied to every response built by create_response().

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Keyword arguments to create_response()                         │
    │      └── create_response(encoding="utf8")                          │
    │                                                                      │
    │   2. Environment variables (ResponseConfig.from_env())             │
    │      └── HTTPMOCK_ENCODING=utf8 pytest                             │
    │                                                                      │
    │   3. Default values (in this dataclass)                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

A typical conftest.py:

    from httpmock import ResponseConfig, create_response, setup_logging

    CONFIG = ResponseConfig.from_env()
    setup_logging(CONFIG)

    @pytest.fixture
    def res():
        return create_response(config=CONFIG)

=============================================================================
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .events import DEFAULT_MAX_LISTENERS


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ResponseConfig:
    """
    Configuration shared by the responses of a test session.

    Development (see every ignored write_head, every deprecated call):
        ResponseConfig(log_level="DEBUG")

    Quiet CI run:
        ResponseConfig(log_level="ERROR")
    """

    encoding: Optional[str] = None
    """
    Initial body encoding of each response (e.g. "utf8").
    None leaves it unset, which makes _is_utf8() report False.
    """

    max_listeners: int = DEFAULT_MAX_LISTENERS
    """
    Per-event listener count above which the default event emitter logs
    a leak warning. 0 disables the check.
    """

    log_level: str = "WARNING"
    """
    Level for the "httpmock" logger hierarchy.
    DEBUG - also report tolerated double write_head() calls
    WARNING - deprecated send() call shapes and listener leaks
    """

    @classmethod
    def from_env(cls) -> "ResponseConfig":
        """
        Create configuration from environment variables.

        HTTPMOCK_ENCODING       Initial encoding (default: unset)
        HTTPMOCK_MAX_LISTENERS  Listener leak threshold (default: 10)
        HTTPMOCK_LOG_LEVEL      Logging level (default: WARNING)
        """
        return cls(
            encoding=os.getenv("HTTPMOCK_ENCODING") or None,
            max_listeners=int(os.getenv("HTTPMOCK_MAX_LISTENERS", str(DEFAULT_MAX_LISTENERS))),
            log_level=os.getenv("HTTPMOCK_LOG_LEVEL", "WARNING"),
        )

    def validate(self) -> None:
        """Fail fast on values that would only surface later as odd behaviour."""
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. Must be one of {', '.join(_LOG_LEVELS)}."
            )

        if self.max_listeners < 0:
            raise ValueError("max_listeners must be >= 0")


def setup_logging(config: ResponseConfig) -> None:
    """Configure logging based on config."""
    config.validate()
    level = getattr(logging, config.log_level.upper(), logging.WARNING)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logging.getLogger("httpmock").setLevel(level)
