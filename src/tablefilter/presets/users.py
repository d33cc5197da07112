"""Filter columns of the admin users view."""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from tablefilter.core.modules.column.models import ColumnConfig, ColumnOption, ColumnType
from tablefilter.utils import to_datetime

DEFAULT_ROLE = "genitore"

ROLE_OPTIONS: list[ColumnOption] = [
    ColumnOption(label="Amministratore", value="amministratore", icon="shield"),
    ColumnOption(label="Editor", value="editor", icon="user-check"),
    ColumnOption(label="Animatore", value="animatore", icon="user-plus"),
    ColumnOption(label="Genitore", value="genitore", icon="user"),
]

MEMBERSHIP_STATUS_OPTIONS: list[ColumnOption] = [
    ColumnOption(label="Membro", value="member", icon="user-check"),
    ColumnOption(label="Non membro", value="non_member", icon="user"),
]


def _joined_at(row: Mapping[str, Any]) -> datetime | None:
    joined_at = row.get("joinedAt")
    return to_datetime(joined_at) if joined_at else None


USERS_COLUMNS: list[ColumnConfig] = [
    ColumnConfig(id="name", accessor=lambda row: row.get("name") or "", display_name="Nome", type=ColumnType.TEXT, icon="user"),
    ColumnConfig(id="email", accessor=lambda row: row["email"], display_name="Email", type=ColumnType.TEXT, icon="mail"),
    ColumnConfig(
        id="phoneNumber",
        accessor=lambda row: row.get("phoneNumber") or "",
        display_name="Telefono",
        type=ColumnType.TEXT,
        icon="phone",
    ),
    # Users outside the organization have no role and are shown as parents
    ColumnConfig(
        id="role",
        accessor=lambda row: row.get("role") or DEFAULT_ROLE,
        display_name="Ruolo",
        type=ColumnType.OPTION,
        options=ROLE_OPTIONS,
        icon="shield",
    ),
    ColumnConfig(
        id="membershipStatus",
        accessor=lambda row: "member" if row.get("role") else "non_member",
        display_name="Stato Membro",
        type=ColumnType.OPTION,
        options=MEMBERSHIP_STATUS_OPTIONS,
        icon="users",
    ),
    ColumnConfig(
        id="createdAt",
        accessor=lambda row: to_datetime(row["createdAt"]),
        display_name="Data Registrazione",
        type=ColumnType.DATE,
        icon="calendar",
    ),
    ColumnConfig(id="joinedAt", accessor=_joined_at, display_name="Data Ingresso", type=ColumnType.DATE, icon="calendar"),
]


def get_role_label(role: str | None) -> str:
    """Get the display label of a role, unknown and missing roles read as parent."""
    for option in ROLE_OPTIONS:
        if option.value == role:
            return option.label
    return "Genitore"
