"""Tests for calendar invite delivery via httpx."""

from collections.abc import Generator
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from src.core.config import settings
from src.domain.contact import Contact
from src.interface.invite_sender import build_invite_payload, check_backend, invite_recipients, send_invite


@pytest.fixture(autouse=True)
def mock_asyncio_sleep() -> Generator[AsyncMock, None, None]:
    """Mock asyncio.sleep to avoid actual delays in retry tests."""
    with patch("src.interface.invite_sender.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
        yield mock_sleep


@pytest.fixture
def responsible() -> Contact:
    return Contact(id="c1", name="Carla", email="carla@example.com")


@pytest.fixture
def participants() -> list[Contact]:
    return [
        Contact(id="c2", name="Diego", email="diego@example.com"),
        Contact(id="c1", name="Carla", email="carla@example.com"),
    ]


@pytest.fixture
def task(task_factory):
    return task_factory(id="7", name="Review", description="Agenda", due_date=datetime(2024, 7, 1, 10, tzinfo=UTC))


def _response(status_code: int, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.is_success = 200 <= status_code < 300
    response.text = text
    response.request = MagicMock()
    return response


class TestPayload:
    def test_recipients_deduplicated_responsible_first(self, responsible, participants) -> None:
        assert invite_recipients(responsible, participants) == ["carla@example.com", "diego@example.com"]

    def test_recipients_without_responsible(self, participants) -> None:
        assert invite_recipients(None, participants[:1]) == ["diego@example.com"]

    def test_payload(self, task, responsible, participants) -> None:
        payload = build_invite_payload(task, responsible, participants)

        assert payload["subject"] == "Convite: Review"
        assert payload["message"] == "Agenda"
        assert payload["ics"].startswith("BEGIN:VCALENDAR")


class TestSendInvite:
    """Test sending invites to the invite backend."""

    async def test_success(self, task, responsible, participants) -> None:
        with patch("httpx.AsyncClient.post", new_callable=AsyncMock, return_value=_response(200)) as mock_post:
            result = await send_invite(
                backend_url="http://invites.local/", task=task, responsible=responsible, participants=participants
            )

        assert result.success is True
        assert result.recipients == ["carla@example.com", "diego@example.com"]
        assert mock_post.await_args.args[0] == "http://invites.local/api/invites"

    async def test_api_key_header(self, task, responsible, monkeypatch) -> None:
        monkeypatch.setattr(settings, "invite_backend_api_key", "secret")

        with patch("httpx.AsyncClient.post", new_callable=AsyncMock, return_value=_response(200)) as mock_post:
            await send_invite(backend_url="http://invites.local", task=task, responsible=responsible, participants=[])

        assert mock_post.await_args.kwargs["headers"]["X-Api-Key"] == "secret"

    async def test_no_recipients(self, task) -> None:
        with patch("httpx.AsyncClient.post", new_callable=AsyncMock) as mock_post:
            result = await send_invite(backend_url="http://invites.local", task=task, responsible=None, participants=[])

        assert result.success is False
        mock_post.assert_not_awaited()

    async def test_client_error_not_retried(self, task, responsible) -> None:
        with patch(
            "httpx.AsyncClient.post", new_callable=AsyncMock, return_value=_response(400, "bad payload")
        ) as mock_post:
            result = await send_invite(
                backend_url="http://invites.local", task=task, responsible=responsible, participants=[]
            )

        assert result.success is False
        assert "bad payload" in result.message
        assert mock_post.await_count == 1

    async def test_server_error_retried_with_backoff(self, task, responsible, mock_asyncio_sleep) -> None:
        with patch("httpx.AsyncClient.post", new_callable=AsyncMock, return_value=_response(503)) as mock_post:
            result = await send_invite(
                backend_url="http://invites.local",
                task=task,
                responsible=responsible,
                participants=[],
                max_retries=3,
                retry_delay=1.0,
            )

        assert result.success is False
        assert result.message == "Max retries exceeded"
        assert mock_post.await_count == 3
        assert [c.args[0] for c in mock_asyncio_sleep.await_args_list] == [1.0, 2.0]

    async def test_recovers_after_transient_error(self, task, responsible) -> None:
        responses = [httpx.ConnectError("refused"), _response(200)]
        with patch("httpx.AsyncClient.post", new_callable=AsyncMock, side_effect=responses) as mock_post:
            result = await send_invite(
                backend_url="http://invites.local", task=task, responsible=responsible, participants=[]
            )

        assert result.success is True
        assert mock_post.await_count == 2

    async def test_transport_failure_never_raises(self, task, responsible) -> None:
        with patch("httpx.AsyncClient.post", new_callable=AsyncMock, side_effect=httpx.ConnectError("refused")):
            result = await send_invite(
                backend_url="http://invites.local", task=task, responsible=responsible, participants=[]
            )

        assert result.success is False
        assert "Failed after retries" in result.message


class TestCheckBackend:
    async def test_reachable(self) -> None:
        with patch("httpx.AsyncClient.get", new_callable=AsyncMock, return_value=_response(404)):
            result = await check_backend("http://invites.local")

        assert result.success is True

    async def test_server_error(self) -> None:
        with patch("httpx.AsyncClient.get", new_callable=AsyncMock, return_value=_response(500)):
            result = await check_backend("http://invites.local")

        assert result.success is False

    async def test_unreachable(self) -> None:
        with patch("httpx.AsyncClient.get", new_callable=AsyncMock, side_effect=httpx.ConnectError("refused")):
            result = await check_backend("http://invites.local")

        assert result.success is False
        assert "Connection failed" in result.message
