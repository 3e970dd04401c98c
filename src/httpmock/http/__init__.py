"""
=============================================================================
HTTP RESPONSE SIMULATION
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │ RESPONSE (response.py)                                              │
    │ ─────────────────────────────────────────────────────────────────── │
    │ MockResponse: the response state machine and its test accessors    │
    │ create_response(): builds one from a ResponseConfig                 │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ DISPATCH (dispatch.py)                                              │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Turns send()/json()/redirect() argument tuples into call shapes     │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ STATUS CODES (status_codes.py) / MIME TYPES (mime_types.py)         │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Reason phrases for send_status(), type tokens for res.type()        │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .response import MockResponse, ResponseState, InvalidStateError, create_response
from .status_codes import HTTPStatus, status_phrase
from .mime_types import lookup

__all__ = [
    # Response
    "MockResponse",
    "ResponseState",
    "InvalidStateError",
    "create_response",

    # Status codes
    "HTTPStatus",
    "status_phrase",

    # MIME types
    "lookup",
]
