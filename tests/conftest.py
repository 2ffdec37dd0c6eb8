"""Pytest configuration and shared fixtures."""

import json
import os
from typing import Callable, Dict, Generator

import httpx
import pytest
from fastapi.testclient import TestClient

# Test environment must be set before the app module reads its config
os.environ["DORMDESK_LOG_TO_FILE"] = "false"
os.environ["DORMDESK_SEED_DEMO_DATA"] = "false"
os.environ.pop("DORMDESK_CONFIG_FILE", None)

from dormdesk.api import dependencies  # noqa: E402
from dormdesk.api.dependencies import AppContainer  # noqa: E402
from dormdesk.auth.session import SessionResolver  # noqa: E402
from dormdesk.auth.tokens import SessionRegistry  # noqa: E402
from dormdesk.config import DormConfig, reset_config  # noqa: E402
from dormdesk.facade import DormitoryFacade  # noqa: E402
from dormdesk.services.report_generator import ReportGenerator  # noqa: E402
from dormdesk.store.domain_store import DomainStore  # noqa: E402

ADMIN_EMAIL = "admin@dorm.com"
ADMIN_PASSWORD = "password123"
REPORT_TEXT = "**Overall Summary**: All good."


def gemini_payload(text: str) -> Dict:
    """Body of a successful generateContent response."""
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


@pytest.fixture(autouse=True)
def fresh_config():
    """Drop cached config so environment changes in one test never leak."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def store() -> DomainStore:
    """Empty store with 10 rooms of capacity 2 and no demo data."""
    return DomainStore(total_rooms=10, max_tenants_per_room=2)


@pytest.fixture
def seeded_store() -> DomainStore:
    """Store loaded with the demo data set."""
    return DomainStore.from_config(DormConfig(seed_demo_data=True))


@pytest.fixture
def resolver(store: DomainStore) -> SessionResolver:
    return SessionResolver(store, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def report_handler() -> Dict[str, Callable]:
    """Swap ``report_handler["handler"]`` to change what the fake report service returns."""
    return {"handler": lambda request: httpx.Response(200, json=gemini_payload(REPORT_TEXT))}


@pytest.fixture
def report_generator(report_handler) -> ReportGenerator:
    """Report client wired to an in-process mock transport."""
    transport = httpx.MockTransport(lambda request: report_handler["handler"](request))
    return ReportGenerator(api_key="test-key", model="test-model", transport=transport)


@pytest.fixture
def facade(store: DomainStore, resolver: SessionResolver, report_generator) -> DormitoryFacade:
    return DormitoryFacade(store, resolver, report_generator=report_generator)


@pytest.fixture
def container(store, resolver, facade) -> AppContainer:
    return AppContainer(store=store, resolver=resolver, facade=facade, sessions=SessionRegistry())


@pytest.fixture
def client(container, monkeypatch) -> Generator[TestClient, None, None]:
    """Test client bound to a fresh container."""
    from dormdesk.main import app

    monkeypatch.setattr(dependencies, "_container", container)

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(client: TestClient) -> Dict[str, str]:
    response = client.post(
        "/v1/auth/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['sessionToken']}"}


@pytest.fixture
def tenant_headers(client: TestClient, admin_headers) -> Dict[str, str]:
    """Bearer header for tenant 'Alice' in room 3."""
    response = client.post(
        "/v1/rooms/3/tenants", json={"name": "Alice", "rent": 9000}, headers=admin_headers
    )
    assert response.status_code == 201

    response = client.post("/v1/auth/tenant/login", json={"name": "alice", "roomId": 3})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['sessionToken']}"}


@pytest.fixture
def config_file(tmp_path) -> Callable:
    """Write a JSON config file and return its path."""

    def _write(data: Dict) -> str:
        path = tmp_path / "dormdesk.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)

    return _write
