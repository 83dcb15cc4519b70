"""Tests for dashboard, create-user and typeahead routes."""

from fastapi.testclient import TestClient

from tests.conftest import FakeDirectoryClient
from trueconf_console.domain.errors import DirectoryError


def test_dashboard_without_search_makes_no_remote_call(
    logged_in_client: TestClient, directory_client: FakeDirectoryClient
) -> None:
    response = logged_in_client.get("/")

    assert response.status_code == 200
    assert "Enter a user ID" in response.text
    assert directory_client.calls == []


def test_dashboard_shows_found_user(
    logged_in_client: TestClient, directory_client: FakeDirectoryClient
) -> None:
    directory_client.users["alice"] = {"id": "alice", "display_name": "Alice A"}

    response = logged_in_client.get("/", params={"search": "alice"})

    assert response.status_code == 200
    assert "Alice A" in response.text
    assert "found results." in response.text


def test_dashboard_page_past_results_is_empty(
    logged_in_client: TestClient, directory_client: FakeDirectoryClient
) -> None:
    directory_client.users["alice"] = {"id": "alice", "display_name": "Alice A"}

    response = logged_in_client.get("/", params={"search": "alice", "page": "2"})

    assert "Alice A" not in response.text
    assert "found results" not in response.text


def test_dashboard_not_found_shows_empty_state(
    logged_in_client: TestClient,
) -> None:
    response = logged_in_client.get("/", params={"search": "ghost"})

    assert response.status_code == 200
    assert 'No user found for "ghost"' in response.text


def test_dashboard_remote_failure_shows_inline_error(
    logged_in_client: TestClient, directory_client: FakeDirectoryClient
) -> None:
    directory_client.fail_with = DirectoryError("Server exploded", 500)

    response = logged_in_client.get("/", params={"search": "alice"})

    assert response.status_code == 200
    assert "Failed to fetch user data" in response.text


def test_create_user_success_redirects_to_dashboard(
    logged_in_client: TestClient, directory_client: FakeDirectoryClient
) -> None:
    response = logged_in_client.post(
        "/tambah",
        data={"id": "alice", "password": "pw123", "display_name": "Alice A"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/?search=alice"
    payload = directory_client.created[0]
    assert payload["display_name"] == "Alice A"
    assert payload["email"] == "alice@example.test"


def test_create_user_requires_id_and_password(
    logged_in_client: TestClient, directory_client: FakeDirectoryClient
) -> None:
    response = logged_in_client.post(
        "/tambah",
        data={"id": "alice", "company": "Acme"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == "/tambah"
    assert directory_client.calls == []
    page = logged_in_client.get("/tambah")
    assert "User ID and password are required." in page.text
    assert 'value="Acme"' in page.text


def test_create_user_remote_failure_preserves_input(
    logged_in_client: TestClient, directory_client: FakeDirectoryClient
) -> None:
    directory_client.rejected["alice"] = "Login already used"

    response = logged_in_client.post(
        "/tambah",
        data={"id": "alice", "password": "pw123", "first_name": "Alice"},
        follow_redirects=False,
    )

    assert response.headers["location"] == "/tambah"
    page = logged_in_client.get("/tambah")
    assert "Failed to add user: Login already used" in page.text
    assert 'value="Alice"' in page.text
    assert "pw123" not in page.text


def test_typeahead_short_term_returns_empty(
    logged_in_client: TestClient, directory_client: FakeDirectoryClient
) -> None:
    response = logged_in_client.get("/api/users/search", params={"term": "a"})

    assert response.json() == []
    assert directory_client.calls == []


def test_typeahead_returns_only_ids(
    logged_in_client: TestClient, directory_client: FakeDirectoryClient
) -> None:
    directory_client.users["alice"] = {"id": "alice", "password": "x", "email": "e"}
    directory_client.users["alina"] = {"id": "alina", "email": "e"}

    response = logged_in_client.get("/api/users/search", params={"term": "ali"})

    assert response.status_code == 200
    assert response.json() == ["alice", "alina"]


def test_typeahead_failure_returns_empty(
    logged_in_client: TestClient, directory_client: FakeDirectoryClient
) -> None:
    directory_client.fail_with = DirectoryError("timeout")

    response = logged_in_client.get("/api/users/search", params={"term": "ali"})

    assert response.status_code == 200
    assert response.json() == []


def test_typeahead_requires_login(client: TestClient) -> None:
    response = client.get(
        "/api/users/search", params={"term": "ali"}, follow_redirects=False
    )

    assert response.status_code == 303


def test_typeahead_ignores_malformed_entries(
    logged_in_client: TestClient, directory_client: FakeDirectoryClient
) -> None:
    async def malformed_search(term: str, limit: int = 10) -> list[object]:
        return ["alice", {"id": "bob"}]

    directory_client.search_users = malformed_search  # type: ignore[method-assign]

    response = logged_in_client.get("/api/users/search", params={"term": "al"})

    assert response.status_code == 200
    assert response.json() == ["bob"]
