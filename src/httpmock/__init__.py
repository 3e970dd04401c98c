"""
=============================================================================
HTTPMOCK - In-Memory HTTP Response Simulator
=============================================================================

Unit-test request handlers without a socket or a framework runtime.
A MockResponse records everything a handler does to its response
(status, headers, body, redirects, rendered views, cookies) and
exposes it through underscored inspection helpers.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    httpmock/
    ├── __init__.py          # This file - package exports
    ├── config.py            # ResponseConfig dataclass, setup_logging()
    ├── events.py            # EventEmitter (notification service)
    ├── stream.py            # WritableStream (byte-sink double)
    └── http/
        ├── response.py      # MockResponse, create_response()
        ├── dispatch.py      # Call-shape resolution for overloaded calls
        ├── status_codes.py  # HTTPStatus and reason phrases
        └── mime_types.py    # Type-token → MIME type lookup

=============================================================================
QUICK START
=============================================================================

    from httpmock import create_response

    def handler(req, res):
        res.status(201).set("Location", "/users/1")
        res.json({"id": 1})

    res = create_response()
    handler(None, res)

    assert res._get_status_code() == 201
    assert res._get_headers()["Location"] == "/users/1"
    assert res._get_data() == '{"id":1}'
    assert res._is_json()

=============================================================================
"""

__version__ = "1.0.0"

from .config import ResponseConfig, setup_logging
from .events import EventEmitter
from .stream import WritableStream
from .http import MockResponse, InvalidStateError, create_response, HTTPStatus

__all__ = [
    "MockResponse",
    "InvalidStateError",
    "create_response",
    "ResponseConfig",
    "setup_logging",
    "EventEmitter",
    "WritableStream",
    "HTTPStatus",
    "__version__",
]
