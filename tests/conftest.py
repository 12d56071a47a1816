from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest


def make_pin(
    pin_id: str | None,
    likes: Any = 0,
    saves: Any = 0,
    image: str | None = "https://i.pinimg.com/originals/aa/bb/cc.jpg",
    **extra: Any,
) -> dict[str, Any]:
    """Build a raw pin shaped like the widgets feed returns them."""
    pin: dict[str, Any] = {"like_count": likes, "repin_count": saves, **extra}
    if pin_id is not None:
        pin["id"] = pin_id
    if image is not None:
        pin["images"] = {"736x": {"url": image}}
    return pin


def data_page(pins: list[dict], bookmark: str | None = None) -> dict[str, Any]:
    return {"status": "success", "data": {"pins": pins}, "bookmark": bookmark}


class FakeUpstream:
    """Serves a scripted sequence of responses and records every request."""

    def __init__(self, responses: list[httpx.Response] | Callable[[httpx.Request], httpx.Response]):
        self._responses = responses
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if callable(self._responses):
            return self._responses(request)
        return self._responses[len(self.requests) - 1]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_upstream() -> Callable[..., FakeUpstream]:
    return FakeUpstream
