"""
Test configuration and fixtures for the UPC lookup test suite.

Provides:
- ProviderStub: an httpx.MockTransport handler that answers per host and
  records every request, so tests can assert which providers were called
- Settings reset (no provider keys, a known gateway token) for every test
- FastAPI TestClient fixture wired to the stub
"""
from typing import Any, Callable, Dict, List, Optional, Union

import httpx
import pytest
from fastapi.testclient import TestClient

from upclookup.core.config import settings
from upclookup.core.context import LookupContext

GO_UPC_HOST = "go-upc.com"
UPCITEMDB_HOST = "api.upcitemdb.com"
OFF_HOST = "world.openfoodfacts.org"

SAMPLE_UPC = "012345678905"
GATEWAY_TOKEN = "gw-test-token"

Handler = Callable[[httpx.Request], Any]


class ProviderStub:
    """Canned provider responses keyed by host. Unknown hosts get a 404."""

    def __init__(self):
        self.routes: Dict[str, Union[httpx.Response, Handler, Exception]] = {}
        self.calls: List[httpx.Request] = []

    def on(
        self,
        host: str,
        *,
        json: Any = None,
        status: int = 200,
        text: Optional[str] = None,
        exc: Optional[Exception] = None,
        handler: Optional[Handler] = None,
    ) -> "ProviderStub":
        if handler is not None:
            self.routes[host] = handler
        elif exc is not None:
            self.routes[host] = exc
        elif text is not None:
            self.routes[host] = httpx.Response(status, text=text)
        else:
            self.routes[host] = httpx.Response(status, json=json)
        return self

    def __call__(self, request: httpx.Request):
        self.calls.append(request)
        route = self.routes.get(request.url.host)
        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(request)
        return route

    def calls_to(self, host: str) -> List[httpx.Request]:
        return [r for r in self.calls if r.url.host == host]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Every test starts with no provider keys and GATEWAY_TOKEN set to a known value."""
    monkeypatch.setattr(settings, "GO_UPC_API_KEY", "")
    monkeypatch.setattr(settings, "UPCITEMDB_API_KEY", "")
    monkeypatch.setattr(settings, "GATEWAY_TOKEN", GATEWAY_TOKEN)
    monkeypatch.setattr(settings, "GO_UPC_BASE_URL", "https://go-upc.com")
    monkeypatch.setattr(settings, "UPCITEMDB_BASE_URL", "https://api.upcitemdb.com")
    monkeypatch.setattr(settings, "OPENFOODFACTS_BASE_URL", "https://world.openfoodfacts.org")
    monkeypatch.setattr(settings, "PROVIDER_TIMEOUT_SECONDS", 10.0)
    yield


@pytest.fixture()
def stub():
    return ProviderStub()


@pytest.fixture()
def make_context(stub):
    """Build a LookupContext whose requests all go to the stub."""

    def _make(**overrides) -> LookupContext:
        return LookupContext(transport=stub.transport(), **overrides)

    return _make


@pytest.fixture()
def client(stub):
    """
    FastAPI TestClient with every upstream request answered by the stub.
    """
    from upclookup.api.deps import get_upstream_transport
    from upclookup.main import create_app

    app = create_app()
    app.dependency_overrides[get_upstream_transport] = lambda: stub.transport()
    with TestClient(app) as c:
        yield c


# ---------------------------------------------------------------------------
# Canned provider bodies
# ---------------------------------------------------------------------------

def go_upc_body(**product) -> dict:
    return {"code": SAMPLE_UPC, "codeType": "UPC", "product": product}


def upcitemdb_body(*items) -> dict:
    return {"code": "OK", "total": len(items), "offset": 0, "items": list(items)}


def off_body(**product) -> dict:
    return {"code": SAMPLE_UPC, "status": 1, "status_verbose": "product found", "product": product}


VERIFIED_HEADERS = {
    "X-Gateway-Token": GATEWAY_TOKEN,
    "X-Caller-Uid": "user-123",
    "X-Caller-Email-Verified": "true",
}
