"""
=============================================================================
CALL-SHAPE DISPATCH
=============================================================================

send(), json(), jsonp() and redirect() come from framework APIs that infer
intent from how many arguments they got and which of them are numbers.
This module turns a raw argument tuple into ONE explicit call shape, so the
response methods only ever branch on a type, never on len(args) or on
isinstance checks scattered through their bodies.

=============================================================================
send(*args)
=============================================================================

    ┌──────────────────────┬──────────────────────┬──────────────────────────┐
    │  Arguments           │  Shape               │  Effect                  │
    ├──────────────────────┼──────────────────────┼──────────────────────────┤
    │  (404)               │  SendStatus          │  status only             │
    │  ("hi")              │  SendBody            │  body                    │
    │  (201, "hi")         │  SendStatusBody      │  body, then status       │
    │  ("hi", 201)         │  SendBodyStatus  (!) │  body, then status       │
    │  ("hi", "utf8")      │  SendBodyEncoding    │  body, then encoding     │
    │  ("hi", {...}, 201)  │  SendLegacy      (!) │  body, headers, status   │
    │  () or 4+ args       │  SendNothing         │  nothing                 │
    └──────────────────────┴──────────────────────┴──────────────────────────┘

    (!) deprecated shapes: the response warns but still applies them.

"Numeric" means int or float. bool is excluded even though it subclasses
int: send(True) is a body, not status 1.

=============================================================================
"""

from dataclasses import dataclass
from typing import Any, ClassVar, List, Mapping, Optional, Tuple, Union


def is_number(value: Any) -> bool:
    """True for int/float values that are not bools."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# =============================================================================
# send() SHAPES
# =============================================================================

@dataclass(frozen=True)
class SendStatus:
    status_code: int
    deprecation: ClassVar[Optional[str]] = None


@dataclass(frozen=True)
class SendBody:
    body: Any
    deprecation: ClassVar[Optional[str]] = None


@dataclass(frozen=True)
class SendStatusBody:
    status_code: int
    body: Any
    deprecation: ClassVar[Optional[str]] = None


@dataclass(frozen=True)
class SendBodyStatus:
    body: Any
    status_code: int
    deprecation: ClassVar[Optional[str]] = "Called send() with deprecated parameter order"


@dataclass(frozen=True)
class SendBodyEncoding:
    body: Any
    encoding: Any
    deprecation: ClassVar[Optional[str]] = None


@dataclass(frozen=True)
class SendLegacy:
    body: Any
    headers: Any
    status_code: Any
    deprecation: ClassVar[Optional[str]] = "Called send() with deprecated three parameters"


@dataclass(frozen=True)
class SendNothing:
    deprecation: ClassVar[Optional[str]] = None


SendCall = Union[
    SendStatus,
    SendBody,
    SendStatusBody,
    SendBodyStatus,
    SendBodyEncoding,
    SendLegacy,
    SendNothing,
]


def resolve_send(args: Tuple[Any, ...]) -> SendCall:
    """
    Classify the positional arguments of send().

    Examples:
        >>> resolve_send((404,))
        SendStatus(status_code=404)
        >>> resolve_send(("ok", 200))
        SendBodyStatus(body='ok', status_code=200)
    """
    if len(args) == 1:
        (a,) = args
        return SendStatus(a) if is_number(a) else SendBody(a)

    if len(args) == 2:
        a, b = args
        if is_number(a):
            return SendStatusBody(status_code=a, body=b)
        if is_number(b):
            return SendBodyStatus(body=a, status_code=b)
        return SendBodyEncoding(body=a, encoding=b)

    if len(args) == 3:
        a, b, c = args
        return SendLegacy(body=a, headers=b, status_code=c)

    return SendNothing()


# =============================================================================
# json() / jsonp() PARTS
# =============================================================================
#
# Each of the (at most two) arguments is classified on its own. Blank
# arguments (None, False, 0, NaN, "") are skipped entirely, so json(0)
# changes nothing. Empty containers are NOT blank: json({}) appends "{}".
#
# =============================================================================

@dataclass(frozen=True)
class JsonStatus:
    status_code: int


@dataclass(frozen=True)
class JsonPayload:
    payload: Any


JsonPart = Union[JsonStatus, JsonPayload]


def is_blank(value: Any) -> bool:
    """None, False, 0, NaN or the empty string."""
    if value is None or value is False:
        return True
    if is_number(value):
        return value == 0 or value != value
    return isinstance(value, str) and value == ""


def resolve_json(args: Tuple[Any, ...]) -> List[JsonPart]:
    """Classify json()/jsonp() arguments, in order, dropping blank ones."""
    parts: List[JsonPart] = []
    for arg in args:
        if is_blank(arg):
            continue
        parts.append(JsonStatus(arg) if is_number(arg) else JsonPayload(arg))
    return parts


# =============================================================================
# redirect()
# =============================================================================

@dataclass(frozen=True)
class RedirectTo:
    status_code: int
    url: Any


def resolve_redirect(args: Tuple[Any, ...]) -> Optional[RedirectTo]:
    """
    Classify redirect() arguments.

    (url)           → RedirectTo(302, url)
    (status, url)   → RedirectTo(status, url)   when status is numeric
    anything else   → None (ignored)
    """
    if len(args) == 1:
        return RedirectTo(status_code=302, url=args[0])

    if len(args) == 2 and is_number(args[0]):
        return RedirectTo(status_code=args[0], url=args[1])

    return None


def is_header_map(value: Any) -> bool:
    """True when a write_head() argument is a header mapping rather than a message."""
    return isinstance(value, Mapping)
