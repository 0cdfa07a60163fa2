"""Centralized message templates for task history, alerts and reports.

All user-facing strings are defined here, keyed by language ("pt" or "en"),
so wording can be changed in one place. Portuguese is the default.
"""

DEFAULT_LANGUAGE = "pt"

STATUS_LABELS: dict[str, dict[str, str]] = {
    "pt": {
        "PENDING": "Pendente",
        "IN_PROGRESS": "Em Andamento",
        "COMPLETED": "Concluída",
        "OVERDUE": "Atrasada",
    },
    "en": {
        "PENDING": "Pending",
        "IN_PROGRESS": "In Progress",
        "COMPLETED": "Completed",
        "OVERDUE": "Overdue",
    },
}

PRIORITY_LABELS: dict[str, dict[str, str]] = {
    "pt": {"LOW": "Baixa", "MEDIUM": "Média", "HIGH": "Alta", "URGENT": "Urgente"},
    "en": {"LOW": "Low", "MEDIUM": "Medium", "HIGH": "High", "URGENT": "Urgent"},
}

_PLACEHOLDERS: dict[str, dict[str, str]] = {
    "pt": {"nobody": "Ninguém", "actor": "Usuário", "not_available": "N/A", "expired": "Expirado"},
    "en": {"nobody": "Nobody", "actor": "User", "not_available": "N/A", "expired": "Expired"},
}


def resolve_language(language: str | None) -> str:
    """Return a supported language code, falling back to Portuguese."""
    if language in _PLACEHOLDERS:
        return language
    return DEFAULT_LANGUAGE


def status_label(status: str, *, language: str | None = None) -> str:
    return STATUS_LABELS[resolve_language(language)].get(str(status), str(status))


def priority_label(priority: str, *, language: str | None = None) -> str:
    return PRIORITY_LABELS[resolve_language(language)].get(str(priority), str(priority))


def nobody(*, language: str | None = None) -> str:
    return _PLACEHOLDERS[resolve_language(language)]["nobody"]


def default_actor(*, language: str | None = None) -> str:
    return _PLACEHOLDERS[resolve_language(language)]["actor"]


def not_available(*, language: str | None = None) -> str:
    return _PLACEHOLDERS[resolve_language(language)]["not_available"]


def expired(*, language: str | None = None) -> str:
    return _PLACEHOLDERS[resolve_language(language)]["expired"]


def task_created(*, language: str | None = None) -> str:
    if resolve_language(language) == "en":
        return "Task created."
    return "Tarefa criada."


def name_changed(*, old: str, new: str, language: str | None = None) -> str:
    if resolve_language(language) == "en":
        return f'Name changed from "{old}" to "{new}".'
    return f'Nome alterado de "{old}" para "{new}".'


def description_updated(*, language: str | None = None) -> str:
    if resolve_language(language) == "en":
        return "Description was updated."
    return "Descrição foi atualizada."


def status_changed(*, old: str, new: str, language: str | None = None) -> str:
    old_label = status_label(old, language=language)
    new_label = status_label(new, language=language)
    if resolve_language(language) == "en":
        return f'Status changed from "{old_label}" to "{new_label}".'
    return f'Status alterado de "{old_label}" para "{new_label}".'


def status_set(*, new: str, language: str | None = None) -> str:
    new_label = status_label(new, language=language)
    if resolve_language(language) == "en":
        return f'Status changed to "{new_label}".'
    return f'Status alterado para "{new_label}".'


def priority_changed(*, old: str, new: str, language: str | None = None) -> str:
    old_label = priority_label(old, language=language)
    new_label = priority_label(new, language=language)
    if resolve_language(language) == "en":
        return f'Priority changed from "{old_label}" to "{new_label}".'
    return f'Prioridade alterada de "{old_label}" para "{new_label}".'


def due_date_changed(*, language: str | None = None) -> str:
    if resolve_language(language) == "en":
        return "Due date changed."
    return "Data de vencimento alterada."


def responsible_changed(*, old_name: str, new_name: str, language: str | None = None) -> str:
    if resolve_language(language) == "en":
        return f'Responsible changed from "{old_name}" to "{new_name}".'
    return f'Responsável alterado de "{old_name}" para "{new_name}".'


def participants_updated(*, language: str | None = None) -> str:
    if resolve_language(language) == "en":
        return "Participant list was updated."
    return "Lista de participantes foi atualizada."


def invite_subject(*, task_name: str) -> str:
    return f"Convite: {task_name}"


def task_created_alert(*, task_name: str) -> str:
    return f'Nova tarefa "{task_name}" foi criada.'


def task_updated_alert(*, task_name: str) -> str:
    return f'Tarefa "{task_name}" foi atualizada.'


def task_deleted_alert(*, task_name: str) -> str:
    return f'Tarefa "{task_name}" foi excluída.'


def invite_sent_alert(*, task_name: str) -> str:
    return f'Convite para "{task_name}" enviado.'


def invite_failed_alert(*, task_name: str) -> str:
    return f'Falha ao enviar convite para "{task_name}".'
