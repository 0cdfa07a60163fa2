"""HTTP API router. Thin adapter over the service layer.

The acting user is identified by a ``user_id`` / ``actor_id`` supplied by the
caller; no credentials are verified here.
"""

import logging

from fastapi import APIRouter, FastAPI, Query, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from src.core import db_client
from src.core.errors import ErrorCategory, classify_error, classify_error_with_response
from src.domain.alert import Alert
from src.domain.contact import Contact
from src.domain.create_models import ContactCreate, GroupCreate, TaskCreate, UserInvite
from src.domain.preferences import Preferences
from src.domain.task import Priority, Task, TaskStatus
from src.domain.update_models import (
    ContactUpdate,
    GroupMembersUpdate,
    PreferencesUpdate,
    TaskUpdate,
    UserRoleUpdate,
)
from src.domain.user import Group, User
from src.interface import invite_sender
from src.models.service_models import ActivityReport, AppData, Dashboard, InviteResult
from src.modules.contacts import service as contact_service
from src.modules.members import service as member_service
from src.modules.tasks import service as task_service
from src.modules.tasks.analytics import filter_tasks
from src.services import alert_service, preferences_service


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["api"])

_STATUS_BY_CATEGORY: dict[ErrorCategory, int] = {
    ErrorCategory.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCategory.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCategory.VALIDATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCategory.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCategory.NETWORK_ERROR: status.HTTP_502_BAD_GATEWAY,
    ErrorCategory.STORAGE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCategory.UNKNOWN: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class BackendCheck(BaseModel):
    """Body of the invite backend connectivity check."""

    backend_url: str | None = Field(default=None, description="URL to probe (defaults to the saved preference)")


async def service_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Translate service exceptions into structured JSON errors."""
    category = classify_error(exc)
    response = classify_error_with_response(exc)
    status_code = _STATUS_BY_CATEGORY[category]

    log = logger.error if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR else logger.info
    log("request_failed", extra={"path": request.url.path, "code": response.code, "error": str(exc)})

    return JSONResponse(status_code=status_code, content=response.model_dump(mode="json"))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the service error handler for the exception types services raise."""
    for exc_type in (KeyError, PermissionError, ValueError, db_client.DatabaseError):
        app.add_exception_handler(exc_type, service_error_handler)


# App data


@router.get("/app-data/{user_id}", response_model=AppData)
async def get_app_data(user_id: str) -> AppData:
    return await member_service.get_app_data(user_id)


# Tasks


@router.post("/tasks", response_model=Task, status_code=status.HTTP_201_CREATED)
async def create_task(data: TaskCreate) -> Task:
    return await task_service.create_task(data)


@router.get("/tasks", response_model=list[Task])
async def list_tasks(
    user_id: str,
    status_filter: TaskStatus | None = Query(default=None, alias="status"),
    priority: Priority | None = None,
    responsible: str | None = None,
) -> list[Task]:
    """Tasks visible to ``user_id``, optionally filtered by stored status, priority or responsible."""
    tasks = await task_service.list_visible_tasks(user_id)
    return filter_tasks(tasks, status=status_filter, priority=priority, responsible=responsible)


@router.get("/tasks/{task_id}", response_model=Task)
async def get_task(task_id: str, user_id: str) -> Task:
    return await task_service.get_task(task_id, user_id=user_id)


@router.put("/tasks/{task_id}", response_model=Task)
async def update_task(task_id: str, data: TaskUpdate, user_id: str) -> Task:
    return await task_service.update_task(task_id, data, user_id=user_id)


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: str, user_id: str) -> Response:
    await task_service.delete_task(task_id, user_id=user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/tasks/{task_id}/toggle-status", response_model=Task)
async def toggle_task_status(task_id: str, user_id: str) -> Task:
    return await task_service.toggle_task_status(task_id, user_id=user_id)


@router.get("/tasks/{task_id}/ics")
async def download_task_ics(task_id: str, user_id: str) -> Response:
    ics = await task_service.get_task_ics(task_id, user_id=user_id)
    return Response(
        content=ics.content,
        media_type="text/calendar; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{ics.filename}"'},
    )


@router.post("/tasks/{task_id}/invite", response_model=InviteResult)
async def send_task_invite(task_id: str, user_id: str) -> InviteResult:
    return await task_service.send_task_invite(task_id, user_id=user_id)


# Contacts


@router.post("/contacts", response_model=Contact, status_code=status.HTTP_201_CREATED)
async def create_contact(data: ContactCreate) -> Contact:
    return await contact_service.create_contact(data)


@router.get("/contacts", response_model=list[Contact])
async def list_contacts() -> list[Contact]:
    return await contact_service.list_contacts()


@router.get("/contacts/{contact_id}", response_model=Contact)
async def get_contact(contact_id: str) -> Contact:
    return await contact_service.get_contact(contact_id)


@router.put("/contacts/{contact_id}", response_model=Contact)
async def update_contact(contact_id: str, data: ContactUpdate) -> Contact:
    return await contact_service.update_contact(contact_id, data)


@router.delete("/contacts/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact(contact_id: str) -> Response:
    await contact_service.delete_contact(contact_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Users


@router.get("/users", response_model=list[User])
async def list_users() -> list[User]:
    return await member_service.list_users()


@router.post("/users/invite", response_model=User, status_code=status.HTTP_201_CREATED)
async def invite_user(data: UserInvite, actor_id: str) -> User:
    return await member_service.invite_user(data, actor_id=actor_id)


@router.put("/users/{user_id}", response_model=User)
async def change_user_role(user_id: str, data: UserRoleUpdate, actor_id: str) -> User:
    return await member_service.change_role(user_id, data.role, actor_id=actor_id)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_user(user_id: str, actor_id: str) -> Response:
    await member_service.remove_user(user_id, actor_id=actor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Groups


@router.post("/groups", response_model=Group, status_code=status.HTTP_201_CREATED)
async def create_group(data: GroupCreate, actor_id: str) -> Group:
    return await member_service.create_group(data, actor_id=actor_id)


@router.get("/groups", response_model=list[Group])
async def list_groups() -> list[Group]:
    return await member_service.list_groups()


@router.delete("/groups/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_group(group_id: str, actor_id: str) -> Response:
    await member_service.delete_group(group_id, actor_id=actor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/groups/{group_id}/members", response_model=Group)
async def set_group_members(group_id: str, data: GroupMembersUpdate, actor_id: str) -> Group:
    return await member_service.set_group_members(group_id, data.member_ids, actor_id=actor_id)


# Dashboard and reports


@router.get("/dashboard/{user_id}", response_model=Dashboard)
async def get_dashboard(user_id: str) -> Dashboard:
    return await task_service.get_dashboard(user_id)


@router.get("/reports/{user_id}", response_model=ActivityReport)
async def get_report(user_id: str) -> ActivityReport:
    return await task_service.get_report(user_id)


# Preferences


@router.get("/preferences", response_model=Preferences)
async def get_preferences() -> Preferences:
    return await preferences_service.get_preferences()


@router.put("/preferences", response_model=Preferences)
async def update_preferences(data: PreferencesUpdate) -> Preferences:
    return await preferences_service.update_preferences(data)


@router.post("/preferences/test-backend", response_model=InviteResult)
async def test_invite_backend(data: BackendCheck) -> InviteResult:
    backend_url = data.backend_url or (await preferences_service.get_preferences()).backend_url
    if not backend_url:
        return InviteResult(success=False, message="Invite backend URL is not configured")
    return await invite_sender.check_backend(backend_url)


# Alerts


@router.get("/alerts", response_model=list[Alert])
async def list_alerts(unread_only: bool = False) -> list[Alert]:
    return await alert_service.list_alerts(unread_only=unread_only)


@router.post("/alerts/{alert_id}/read", response_model=Alert)
async def mark_alert_read(alert_id: str) -> Alert:
    return await alert_service.mark_alert_read(alert_id=alert_id)
