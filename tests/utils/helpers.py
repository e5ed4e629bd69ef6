"""Test helper functions."""

import asyncio
from io import BytesIO
from typing import Any, Optional
from unittest.mock import Mock


class MockSocket:
    """Minimal socket for constructing BaseHTTPRequestHandler instances.

    It yields an empty request so construction does not dispatch a method;
    tests set ``path`` and call ``do_GET`` themselves.
    """

    def makefile(self, *args, **kwargs):
        return BytesIO(b"")

    def sendall(self, data):
        pass

    def close(self):
        pass


def create_handler(handler_cls: type, path: str = "/") -> Any:
    """Build a handler for ``path`` with response methods mocked."""
    h = handler_cls(MockSocket(), ("127.0.0.1", 8000), None)
    h.path = path
    h.wfile = BytesIO()
    h.send_response = Mock()
    h.send_header = Mock()
    h.end_headers = Mock()
    return h


class GatedFetch:
    """Fake plot fetcher whose responses are released by the test.

    Each call records its query and waits on its own event; ``release(i, plots)``
    completes call ``i`` with ``plots``.
    """

    def __init__(self):
        self.queries = []
        self._gates: list[asyncio.Event] = []
        self._results: dict[int, Any] = {}

    async def __call__(self, query):
        index = len(self.queries)
        self.queries.append(query)
        gate = asyncio.Event()
        self._gates.append(gate)
        await gate.wait()
        result = self._results[index]
        if isinstance(result, BaseException):
            raise result
        return result

    async def wait_for_calls(self, count: int, timeout: float = 1.0) -> None:
        async def _poll():
            while len(self.queries) < count:
                await asyncio.sleep(0)
        await asyncio.wait_for(_poll(), timeout)

    def release(self, index: int, result: Optional[Any]) -> None:
        self._results[index] = result
        self._gates[index].set()
