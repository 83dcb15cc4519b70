"""Shared test fixtures."""

import io
from dataclasses import dataclass, field

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook

from trueconf_console.adapters.trueconf_client import DirectoryClient
from trueconf_console.api.app import create_app
from trueconf_console.config import Settings
from trueconf_console.containers import AppContainer
from trueconf_console.domain.errors import DirectoryError, NotFoundError
from trueconf_console.domain.imports import TEMPLATE_COLUMNS
from trueconf_console.services.directory import DirectoryService
from trueconf_console.services.imports import ImportService


@dataclass
class FakeDirectoryClient(DirectoryClient):
    """In-memory TrueConf directory that records calls."""

    users: dict[str, dict[str, object]] = field(default_factory=dict)
    rejected: dict[str, str] = field(default_factory=dict)
    created: list[dict[str, object]] = field(default_factory=list)
    bulk_batches: list[list[dict[str, object]]] = field(default_factory=list)
    calls: list[str] = field(default_factory=list)
    fail_with: DirectoryError | None = None

    async def get_user(self, user_id: str) -> dict[str, object]:
        self.calls.append(f"get:{user_id}")
        if self.fail_with is not None:
            raise self.fail_with
        user = self.users.get(user_id)
        if user is None:
            raise NotFoundError("User not found", 404)
        return user

    async def search_users(self, term: str, limit: int = 10) -> list[dict[str, object]]:
        self.calls.append(f"search:{term}")
        if self.fail_with is not None:
            raise self.fail_with
        matches = [user for key, user in self.users.items() if term in key]
        return matches[:limit]

    async def create_user(self, payload: dict[str, object]) -> dict[str, object]:
        user_id = str(payload["id"])
        self.calls.append(f"create:{user_id}")
        if user_id in self.rejected:
            raise DirectoryError(self.rejected[user_id], 400)
        self.created.append(payload)
        self.users[user_id] = payload
        return {"user": {"id": user_id}}

    async def create_users(
        self, payloads: list[dict[str, object]]
    ) -> dict[str, object]:
        self.calls.append("create_bulk")
        if self.fail_with is not None:
            raise self.fail_with
        self.bulk_batches.append(payloads)
        return {"users": [{"id": payload["id"]} for payload in payloads]}


def build_workbook(
    rows: list[list[object]], header: list[object] | None = None
) -> bytes:
    """Build an xlsx file in memory with a header row followed by rows."""
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.append(list(TEMPLATE_COLUMNS) if header is None else header)
    for row in rows:
        worksheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        app_password="console-secret",
        session_secret="session-secret",
        server_address="https://trueconf.test",
        api_key="api-key",
        email_domain="example.test",
    )


@pytest.fixture
def directory_client() -> FakeDirectoryClient:
    return FakeDirectoryClient()


@pytest.fixture
def container(
    settings: Settings, directory_client: FakeDirectoryClient
) -> AppContainer:
    directory_service = DirectoryService(directory_client)
    import_service = ImportService(
        directory_service=directory_service,
        email_domain=settings.email_domain,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        directory_client=directory_client,
        directory_service=directory_service,
        import_service=import_service,
        close_resources=close_resources,
    )


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


@pytest.fixture
def logged_in_client(client: TestClient) -> TestClient:
    response = client.post(
        "/login", data={"password": "console-secret"}, follow_redirects=False
    )
    assert response.status_code == 303
    return client
