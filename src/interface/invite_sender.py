"""Calendar invite delivery over HTTP with retry logic.

Invites are handed to an external backend that e-mails them; this module
only builds the payload and POSTs it.
"""

import asyncio
import logging
from collections.abc import Sequence

import httpx

from src.core import message_templates
from src.core.config import constants, settings
from src.domain.contact import Contact
from src.domain.task import Task
from src.models.service_models import InviteResult
from src.modules.tasks.calendar import build_ics


logger = logging.getLogger(__name__)


# HTTP status code constants for error handling
HTTP_CLIENT_ERROR_START = 400
HTTP_CLIENT_ERROR_END = 500


def _headers() -> dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if settings.invite_backend_api_key:
        headers["X-Api-Key"] = settings.invite_backend_api_key
    return headers


def invite_recipients(responsible: Contact | None, participants: Sequence[Contact]) -> list[str]:
    """E-mail addresses to invite: responsible first, then participants, without repeats."""
    contacts = [responsible, *participants] if responsible else list(participants)
    return list(dict.fromkeys(contact.email for contact in contacts if contact.email))


def build_invite_payload(task: Task, responsible: Contact | None, participants: Sequence[Contact]) -> dict:
    """Request body sent to the invite backend."""
    return {
        "subject": message_templates.invite_subject(task_name=task.name),
        "message": task.description,
        "recipients": invite_recipients(responsible, participants),
        "ics": build_ics(task, responsible, participants),
    }


async def send_invite(
    *,
    backend_url: str,
    task: Task,
    responsible: Contact | None,
    participants: Sequence[Contact],
    max_retries: int = constants.INVITE_MAX_RETRIES,
    retry_delay: float = constants.INVITE_RETRY_DELAY_SECONDS,
) -> InviteResult:
    """Send a task's calendar invite to the invite backend.

    Server errors and transport failures are retried with exponential
    backoff; client errors are not. Never raises.

    Args:
        backend_url: Base URL of the invite backend
        task: Task to invite people to
        responsible: Responsible contact, if any
        participants: Participant contacts
        max_retries: Maximum number of attempts
        retry_delay: Base delay in seconds between attempts

    Returns:
        InviteResult describing the outcome
    """
    payload = build_invite_payload(task, responsible, participants)
    recipients = payload["recipients"]
    if not recipients:
        return InviteResult(success=False, message="Task has no contacts with an e-mail address")

    url = f"{backend_url.rstrip('/')}{constants.INVITE_ENDPOINT_PATH}"

    for attempt in range(max_retries):
        try:
            async with httpx.AsyncClient(timeout=constants.API_TIMEOUT_SECONDS) as client:
                response = await client.post(url, json=payload, headers=_headers())

                if response.is_success:
                    logger.info("Invite sent for task %s to %d recipients", task.id, len(recipients))
                    return InviteResult(success=True, message="Invite sent", recipients=recipients)

                if HTTP_CLIENT_ERROR_START <= response.status_code < HTTP_CLIENT_ERROR_END:
                    logger.warning("Invite rejected for task %s: %s", task.id, response.status_code)
                    return InviteResult(success=False, message=f"Client error: {response.text}")

                raise httpx.HTTPStatusError(
                    f"Server error: {response.status_code}", request=response.request, response=response
                )
        except httpx.HTTPStatusError:
            if attempt < max_retries - 1:
                await asyncio.sleep(retry_delay * (2**attempt))
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            if attempt < max_retries - 1:
                await asyncio.sleep(retry_delay * (2**attempt))
            else:
                logger.warning("Invite delivery failed for task %s: %s", task.id, e)
                return InviteResult(success=False, message=f"Failed after retries: {e!s}")

    return InviteResult(success=False, message="Max retries exceeded")


async def check_backend(backend_url: str) -> InviteResult:
    """Probe the invite backend with a GET to its base URL. Never raises."""
    try:
        async with httpx.AsyncClient(timeout=constants.API_TIMEOUT_SECONDS) as client:
            response = await client.get(backend_url, headers=_headers())
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning("Invite backend unreachable at %s: %s", backend_url, e)
        return InviteResult(success=False, message=f"Connection failed: {e!s}")

    if response.status_code >= HTTP_CLIENT_ERROR_END:
        return InviteResult(success=False, message=f"Backend returned status {response.status_code}")

    logger.info("Invite backend reachable at %s", backend_url)
    return InviteResult(success=True, message="Backend reachable")
