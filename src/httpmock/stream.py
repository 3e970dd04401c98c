"""
Byte-sink test double.

A real response flushes bytes to a socket. The mock never does; it only
needs something that accepts the teardown calls request handlers make
(res.destroy(), res.destroy_soon()) so that those calls don't blow up.
The calls are recorded so a test can assert that teardown happened.
"""

from typing import Any, List, Tuple


class WritableStream:
    """No-op writable stream that remembers the teardown calls it received."""

    def __init__(self):
        self.calls: List[Tuple[str, tuple]] = []

    def destroy(self, *args: Any) -> None:
        self.calls.append(("destroy", args))

    def destroy_soon(self, *args: Any) -> None:
        self.calls.append(("destroy_soon", args))
