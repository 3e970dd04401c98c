"""
=============================================================================
MOCK HTTP RESPONSE
=============================================================================

An in-memory stand-in for a server-side HTTP response object. Hand it to
the request handler under test, let the handler do its thing, then read
back what happened:

    res = create_response()
    handler(req, res)

    assert res._get_status_code() == 201
    assert res._is_json()
    assert res._get_data() == '{"id":1}'
    assert res._is_end_called()

=============================================================================
TWO CALL SURFACES, ONE STATE
=============================================================================

Handlers written against the raw low-level API and handlers written
against a higher-level framework API both work, because both surfaces
mutate the same fields:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   LOW-LEVEL SURFACE              FRAMEWORK SURFACE                   │
    │   ─────────────────              ─────────────────                   │
    │   status_code / status_message   status(code)                        │
    │   set_header / get_header        set / header / get                  │
    │   remove_header                  type / content_type / vary          │
    │   write_head                     send / send_status                  │
    │   write / end                    json / jsonp                        │
    │   set_encoding                   redirect / render / cookie          │
    │            │                              │                          │
    │            └──────────────┬───────────────┘                          │
    │                           ▼                                          │
    │   ┌────────────────────────────────────────────────────────────┐    │
    │   │ status_code  status_message  _headers  cookies             │    │
    │   │ headers_sent                                               │    │
    │   │ ResponseState: data  encoding  ended                       │    │
    │   │                redirect_url  render_view  render_data      │    │
    │   └────────────────────────────────────────────────────────────┘    │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
LIFECYCLE RULES
=============================================================================

    write_head() ── after end()            → InvalidStateError
                 ── after headers are sent → ignored (logged at DEBUG)

    send()/json()/jsonp()  emit "send" then "end"  (ended stays False)
    redirect()             emits "end"             (ended stays False)
    render()               emits "render" then "end"
    end()                  emits "end" and is the ONLY call that sets ended

headers_sent and ended only ever go from False to True.

=============================================================================
"""

import json
import logging
import re
import warnings
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ..config import ResponseConfig
from ..events import EventEmitter, Listener
from ..stream import WritableStream
from .dispatch import (
    JsonStatus,
    SendBody,
    SendBodyEncoding,
    SendBodyStatus,
    SendLegacy,
    SendStatus,
    SendStatusBody,
    is_blank,
    is_header_map,
    resolve_json,
    resolve_redirect,
    resolve_send,
)
from .mime_types import lookup
from .status_codes import status_phrase


logger = logging.getLogger(__name__)

# Marks "argument not passed", which set() must tell apart
# from an explicit None.
_UNSET = object()


def _as_text(value: Any) -> str:
    """
    Render a body chunk the way a browser-side string concatenation would.

        True  → "true"      1.0 → "1"      1.5 → "1.5"      "x" → "x"
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class InvalidStateError(RuntimeError):
    """
    Raised when an operation is not allowed in the response's current state.

    Today that means write_head() after end(): once the exchange is over
    the headers can no longer be finalized. The response is left exactly
    as it was.
    """


@dataclass
class ResponseState:
    """
    Everything about the response that is not a public attribute.

    data is the accumulated body: a str while the body is built by
    appending, or the structured payload itself after send({...}) or
    send([...]) replaced it.
    """

    data: Any = ""
    encoding: Optional[str] = None
    ended: bool = False
    redirect_url: Any = ""
    render_view: Any = ""
    render_data: Any = field(default_factory=dict)


class MockResponse:
    """
    Simulated HTTP response for unit tests.

    Public attributes (read and write them directly, as a handler would):
        status_code:     int, default 200
        status_message:  str, default "OK"
        cookies:         name → {"value": ..., "options": ...}
        headers_sent:    bool, default False

    Use create_response() to build one from a ResponseConfig.
    """

    def __init__(
        self,
        encoding: Optional[str] = None,
        writable_stream: Optional[WritableStream] = None,
        event_emitter: Optional[EventEmitter] = None,
    ):
        """
        Args:
            encoding: Initial body encoding (e.g. "utf8"), unset by default.
            writable_stream: Byte-sink double receiving destroy() calls.
            event_emitter: Notification service for "send"/"end"/"render".
        """
        self._state = ResponseState(encoding=encoding)
        self._stream = writable_stream if writable_stream is not None else WritableStream()
        self._events = event_emitter if event_emitter is not None else EventEmitter()

        self._headers: Dict[str, Any] = {}
        self.status_code: Any = 200
        self.status_message: str = "OK"
        self.cookies: Dict[str, Dict[str, Any]] = {}
        self.headers_sent = False

    # =========================================================================
    # STATUS
    # =========================================================================

    def status(self, code: int) -> "MockResponse":
        """Set the status code. Returns self for chaining."""
        self.status_code = code
        return self

    # =========================================================================
    # HEADERS
    # =========================================================================

    def set_header(self, name: str, value: Any) -> Any:
        """Store value, as given, under the exact name. Returns value."""
        self._headers[name] = value
        return value

    def get_header(self, name: str) -> Any:
        """
        Look up a header: exact name, then lower-case, then upper-case.

        Storage is not normalized: _get_headers() shows every name with
        the casing it was set with. A header stored all lower-case or all
        upper-case is therefore found under any casing ("content-type"
        answers get_header("Content-Type")), while one stored as
        "Content-Type" is found only under that exact name.
        """
        return (
            self._headers.get(name)
            or self._headers.get(name.lower())
            or self._headers.get(name.upper())
        )

    get = get_header

    def remove_header(self, name: str) -> None:
        """Delete the exact-name entry. No case fallback here."""
        self._headers.pop(name, None)

    def set(self, name_or_map: Any, value: Any = _UNSET) -> "MockResponse":
        """
        Set one header, or several from a mapping.

            res.set("Foo", ["bar", "baz"])     # → ["bar", "baz"]
            res.set("Content-Length", 12)      # → "12"
            res.set({"Accept": "text/plain", "X-API-Key": "tobi"})

        With a value, the value is coerced: lists/tuples to a list of
        str, anything else to str. A mapping is applied through
        set_header() as is.
        """
        if value is not _UNSET:
            if isinstance(value, (list, tuple)):
                value = [str(v) for v in value]
            else:
                value = str(value)
            self.set_header(name_or_map, value)
        else:
            for key, val in name_or_map.items():
                self.set_header(key, val)
        return self

    header = set

    def type(self, token: str) -> "MockResponse":
        """
        Set Content-Type from a full MIME type or a short token.

            res.type("application/json")   # verbatim
            res.type("html")               # → text/html
            res.type(".png")               # → image/png
        """
        return self.set("Content-Type", token if "/" in token else lookup(token))

    content_type = type

    def vary(self, fields: Any) -> str:
        """
        Add field(s) to the Vary header, skipping ones already covered.

        Each new field is used as a case-insensitive regular expression
        against the existing tokens; it is dropped if it matches anywhere
        in any of them. So with "Vary: A-B-Test" present, vary("b-test")
        adds nothing.

        Returns:
            The new Vary header value.
        """
        header = self.get_header("Vary") or ""
        values = header.split(", ") if header else []

        if not isinstance(fields, (list, tuple)):
            fields = [fields]

        new_fields = [
            str(f) for f in fields
            if not any(re.search(str(f), value, re.IGNORECASE) for value in values)
        ]

        return self.set_header("Vary", ", ".join(values + new_fields))

    # =========================================================================
    # HEADER FINALIZATION
    # =========================================================================

    def write_head(
        self,
        status_code: Any,
        status_message: Any = None,
        headers: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """
        Commit status code, status message and headers.

            res.write_head(200)
            res.write_head(404, "Nope")
            res.write_head(201, {"Location": "/items/1"})
            res.write_head(201, "Made", {"Location": "/items/1"})

        Headers are merged into the ones already set; same-named keys
        win, the rest survive.

        Raises:
            InvalidStateError: end() was already called.
        """
        if self._state.ended:
            raise InvalidStateError("The end() method has already been called.")

        if self.headers_sent:
            # The client keeps the headers that went out first.
            logger.debug(f"write_head({status_code}) ignored: headers already sent")
            return

        self.status_code = status_code

        if is_header_map(status_message):
            headers = status_message
            status_message = None

        if status_message:
            self.status_message = status_message

        if headers:
            self._headers.update(headers)

    # =========================================================================
    # BODY-PRODUCING OPERATIONS
    # =========================================================================

    def send(self, *args: Any) -> None:
        """
        Send a body and/or status, framework style. Can be called many times.

            res.send(404)                      # status only
            res.send("chunk")                  # appended to the body
            res.send({"statusCode": 201, "body": "ok"})   # status 201, body "ok"
            res.send(201, {"id": 1})           # status, then body
            res.send("text", "utf8")           # body, then encoding

        Deprecated, still honoured, warns with DeprecationWarning:
            res.send("text", 201)              # body, then status
            res.send("text", {"X-A": "1"}, 201)   # body, ALL headers, status

        Emits "send" then "end". Does not mark the response ended.
        """
        call = resolve_send(args)

        if call.deprecation:
            logger.warning(call.deprecation)
            warnings.warn(call.deprecation, DeprecationWarning, stacklevel=2)

        if isinstance(call, SendStatus):
            self.status_code = call.status_code
        elif isinstance(call, SendBody):
            self._format_data(call.body)
        elif isinstance(call, (SendStatusBody, SendBodyStatus)):
            self._format_data(call.body)
            self.status_code = call.status_code
        elif isinstance(call, SendBodyEncoding):
            self._format_data(call.body)
            self._state.encoding = call.encoding
        elif isinstance(call, SendLegacy):
            headers = dict(call.headers) if is_header_map(call.headers) else {}
            self._format_data(call.body)
            self._headers = headers
            self.status_code = call.status_code

        self.headers_sent = True

        self.emit("send")
        self.emit("end")

    def send_status(self, status_code: int) -> None:
        """
        Send a status code with its reason phrase as a plain-text body.

            res.send_status(404)   # body "Not Found"
            res.send_status(599)   # body "599"
        """
        body = status_phrase(status_code) or str(status_code)

        self.status_code = status_code
        self.type("txt")

        return self.send(body)

    def json(self, a: Any = None, b: Any = None) -> None:
        """
        Send JSON. Each argument is either a status code or a payload.

            res.json({"ok": True})          # body '{"ok":true}'
            res.json(201, {"id": 1})        # status 201, body '{"id":1}'
            res.json({"id": 1}, 201)        # same
            res.json(418)                   # status only
            res.json({"a": 1}, {"b": 2})    # body '{"a":1}{"b":2}'

        Payloads are appended to the body. Content-Type is set to
        application/json even when nothing else changes.
        """
        self._send_json("application/json", a, b)

    def jsonp(self, a: Any = None, b: Any = None) -> None:
        """Same as json(), with Content-Type text/javascript."""
        self._send_json("text/javascript", a, b)

    def _send_json(self, content_type: str, *args: Any) -> None:
        self.set_header("Content-Type", content_type)

        for part in resolve_json(args):
            if isinstance(part, JsonStatus):
                self.status_code = part.status_code
            else:
                # Compact separators match what a browser JSON.stringify gives
                self._append(json.dumps(part.payload, separators=(",", ":"), ensure_ascii=False))

        self.emit("send")
        self.emit("end")

    def _format_data(self, data: Any) -> None:
        """
        Apply one send() body argument.

        Mapping   → may carry the status ("statusCode"); its "body" entry,
                    or the whole mapping, REPLACES the body
        list      → replaces the body
        None      → nothing
        other     → str(value) is appended to the body
        """
        if isinstance(data, Mapping):
            if not is_blank(data.get("statusCode")):
                self.status_code = data["statusCode"]
            elif not is_blank(data.get("httpCode")):
                # Reads statusCode on purpose: payloads that only carry
                # httpCode have always ended up with no status code.
                self.status_code = data.get("statusCode")

            body = data.get("body")
            self._state.data = data if is_blank(body) else body

        elif isinstance(data, (list, tuple)):
            self._state.data = data

        elif data is not None:
            self._append(data)

    def _append(self, chunk: Any) -> None:
        if not isinstance(self._state.data, str):
            self._state.data = _as_text(self._state.data)
        self._state.data += _as_text(chunk)

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def write(self, data: Any, encoding: Optional[str] = None) -> None:
        """Append a chunk to the body. Marks headers as sent; emits nothing."""
        self.headers_sent = True

        if data is not None:
            self._append(data)

        if encoding:
            self._state.encoding = encoding

    def end(self, data: Any = None, encoding: Optional[str] = None) -> None:
        """
        Finish the response, optionally with a last chunk.

        The only call that marks the response ended. Calling it again is
        allowed and keeps it ended. Emits "end".
        """
        self.headers_sent = True
        self._state.ended = True

        if not is_blank(data):
            self._append(data)

        if encoding:
            self._state.encoding = encoding

        self.emit("end")

    def redirect(self, *args: Any) -> None:
        """
        Redirect to a URL.

            res.redirect("/login")          # 302
            res.redirect(301, "/new-home")  # given status

        Other call shapes change nothing. Always emits "end".
        """
        target = resolve_redirect(args)

        if target is not None:
            self.status_code = target.status_code
            self._state.redirect_url = target.url

        self.emit("end")

    def render(self, view: Any, *args: Any) -> None:
        """
        Record the view and, when exactly one more argument is given,
        the data to render it with. Emits "render" then "end".
        """
        self._state.render_view = view

        if len(args) == 1:
            self._state.render_data = args[0]

        self.emit("render")
        self.emit("end")

    def set_encoding(self, encoding: Optional[str]) -> None:
        """Set the body encoding, usually "utf8"."""
        self._state.encoding = encoding

    # =========================================================================
    # COOKIES
    # =========================================================================

    def cookie(self, name: str, value: Any, options: Optional[Dict[str, Any]] = None) -> None:
        self.cookies[name] = {"value": value, "options": options}

    def clear_cookie(self, name: str) -> None:
        self.cookies.pop(name, None)

    # =========================================================================
    # STREAM DELEGATION
    # =========================================================================

    def destroy(self, *args: Any) -> Any:
        return self._stream.destroy(*args)

    def destroy_soon(self, *args: Any) -> Any:
        return self._stream.destroy_soon(*args)

    # =========================================================================
    # EVENT DELEGATION
    # =========================================================================
    #
    # Subscription calls return the response, not the emitter, so they
    # chain like the rest of the framework surface:
    #
    #     res.on("end", on_end).on("send", on_send)
    #
    # =========================================================================

    def add_listener(self, event: str, listener: Listener) -> "MockResponse":
        self._events.add_listener(event, listener)
        return self

    def on(self, event: str, listener: Listener) -> "MockResponse":
        self._events.on(event, listener)
        return self

    def once(self, event: str, listener: Listener) -> "MockResponse":
        self._events.once(event, listener)
        return self

    def remove_listener(self, event: str, listener: Listener) -> "MockResponse":
        self._events.remove_listener(event, listener)
        return self

    def remove_all_listeners(self, event: Optional[str] = None) -> "MockResponse":
        self._events.remove_all_listeners(event)
        return self

    def set_max_listeners(self, n: int) -> "MockResponse":
        self._events.set_max_listeners(n)
        return self

    def listeners(self, event: str) -> List[Listener]:
        return self._events.listeners(event)

    def emit(self, event: str, *args: Any) -> bool:
        return self._events.emit(event, *args)

    # =========================================================================
    # TEST INSPECTION
    # =========================================================================
    #
    # Read-only helpers for assertions. They are underscored so they never
    # collide with a name a real response API might grow.
    #
    # =========================================================================

    def _is_end_called(self) -> bool:
        """True once end() has been called."""
        return self._state.ended

    def _get_headers(self) -> Dict[str, Any]:
        """All headers, with the casing they were set with."""
        return self._headers

    def _get_data(self) -> Any:
        """The body sent so far."""
        return self._state.data

    def _get_status_code(self) -> Any:
        return self.status_code

    def _get_status_message(self) -> str:
        return self.status_message

    def _is_json(self) -> bool:
        """True if Content-Type is exactly application/json. The body is not validated."""
        return self.get_header("Content-Type") == "application/json"

    def _is_utf8(self) -> bool:
        """True only if the encoding was set, and set to "utf8"."""
        if not self._state.encoding:
            return False

        return self._state.encoding == "utf8"

    def _is_data_length_valid(self) -> bool:
        """
        Check Content-Length against the body.

        Returns:
            True if no Content-Length header is set; otherwise whether
            it equals the length of the body. A body with no length
            (a mapping or a number stored by send()) never matches.
        """
        content_length = self.get_header("Content-Length")
        if not content_length:
            return True

        data = self._state.data
        if not isinstance(data, (str, list, tuple)):
            return False

        return str(content_length) == str(len(data))

    def _get_redirect_url(self) -> Any:
        return self._state.redirect_url

    def _get_render_view(self) -> Any:
        return self._state.render_view

    def _get_render_data(self) -> Any:
        return self._state.render_data


def create_response(
    config: Optional[ResponseConfig] = None,
    encoding: Optional[str] = None,
    writable_stream: Optional[WritableStream] = None,
    event_emitter: Optional[EventEmitter] = None,
) -> MockResponse:
    """
    Build a fresh MockResponse.

    Args:
        config: Shared defaults; ResponseConfig() when omitted.
        encoding: Overrides config.encoding for this response.
        writable_stream: Replaces the default byte-sink double.
        event_emitter: Replaces the default notification service.
                       The default one gets config.max_listeners.

    Returns:
        A response with status 200 "OK", no headers and an empty body.
    """
    config = config or ResponseConfig()

    if event_emitter is None:
        event_emitter = EventEmitter(max_listeners=config.max_listeners)

    return MockResponse(
        encoding=encoding if encoding is not None else config.encoding,
        writable_stream=writable_stream,
        event_emitter=event_emitter,
    )
