"""
Shared fixtures: a scripted backend behind httpx.MockTransport.
"""

import httpx
import pytest

from anvaya_client.adapters import MemoryCredentialStore
from anvaya_client.config import ClientConfig, RuntimeTarget
from anvaya_client.sdk import HealthcareApi, RequestGateway, SessionManager


API_ROOT = "http://testserver/api"


class FakeBackend:
    """
    Scripted stand-in for the healthcare backend.

    Routes are keyed by (METHOD, path relative to /api). Unknown routes
    answer 404. Every request is recorded.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []

    def on(self, method, path, status=200, json=None, content=None, exc=None):
        self.routes[(method.upper(), f"/api{path}")] = (status, json, content, exc)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": f"No route {request.method} {request.url.path}"})

        status, body, content, exc = route
        if exc is not None:
            raise exc
        if content is not None:
            return httpx.Response(status, content=content)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def store():
    return MemoryCredentialStore()


@pytest.fixture
def config():
    return ClientConfig(base_url="http://testserver", runtime_target=RuntimeTarget.MEMORY)


@pytest.fixture
def gateway(store, backend):
    return RequestGateway(store, base_url=API_ROOT, transport=backend.transport)


@pytest.fixture
def api(gateway):
    return HealthcareApi(gateway)


@pytest.fixture
def sessions(store, api):
    return SessionManager(store, api)


@pytest.fixture
def doctor_profile():
    return {"id": "1", "email": "a@b.com", "name": "Dr. Rao", "role": "DOCTOR"}
