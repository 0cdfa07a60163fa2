"""Domain models and DTOs."""

from src.domain.alert import Alert, AlertType
from src.domain.contact import Contact
from src.domain.create_models import ContactCreate, GroupCreate, TaskCreate, UserInvite
from src.domain.log import ChangeLog
from src.domain.preferences import DateFormat, Language, Preferences
from src.domain.task import Attachment, Priority, ReminderUnit, Task, TaskStatus, Visibility
from src.domain.update_models import (
    ContactUpdate,
    GroupMembersUpdate,
    PreferencesUpdate,
    TaskUpdate,
    UserRoleUpdate,
)
from src.domain.user import Group, User, UserRole


__all__ = [
    "Alert",
    "AlertType",
    "Attachment",
    "ChangeLog",
    "Contact",
    "ContactCreate",
    "ContactUpdate",
    "DateFormat",
    "Group",
    "GroupCreate",
    "GroupMembersUpdate",
    "Language",
    "Preferences",
    "PreferencesUpdate",
    "Priority",
    "ReminderUnit",
    "Task",
    "TaskCreate",
    "TaskStatus",
    "TaskUpdate",
    "User",
    "UserInvite",
    "UserRole",
    "UserRoleUpdate",
    "Visibility",
]
