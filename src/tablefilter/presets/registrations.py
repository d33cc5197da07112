"""Filter columns of the admin registrations view."""

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from tablefilter.core.modules.column.models import ColumnConfig, ColumnOption, ColumnType
from tablefilter.core.modules.filter.models import FilterState, OptionOperator
from tablefilter.utils import to_datetime

STATUS_OPTIONS: list[ColumnOption] = [
    ColumnOption(label="In attesa", value="pending", icon="clock"),
    ColumnOption(label="Confermata", value="confirmed", icon="check-circle"),
    ColumnOption(label="Cancellata", value="cancelled", icon="x"),
    ColumnOption(label="Lista d'attesa", value="waitlist", icon="alert-circle"),
]

PAYMENT_STATUS_OPTIONS: list[ColumnOption] = [
    ColumnOption(label="In attesa", value="pending", icon="clock"),
    ColumnOption(label="Pagato", value="completed", icon="check-circle"),
    ColumnOption(label="Fallito", value="failed", icon="x"),
    ColumnOption(label="Rimborsato", value="refunded", icon="credit-card"),
]


def _date_or_none(value: str | None) -> datetime | None:
    return to_datetime(value) if value else None


def _child_name(row: Mapping[str, Any]) -> str:
    child = row["child"]
    return f"{child['firstName']} {child['lastName']}"


REGISTRATIONS_COLUMNS: list[ColumnConfig] = [
    ColumnConfig(id="childName", accessor=_child_name, display_name="Nome Bambino", type=ColumnType.TEXT, icon="user"),
    ColumnConfig(
        id="parentName", accessor=lambda row: row["parent"]["name"], display_name="Nome Genitore", type=ColumnType.TEXT, icon="user"
    ),
    # Options come from the events loaded at runtime, see create_event_options
    ColumnConfig(
        id="eventTitle", accessor=lambda row: row["event"]["title"], display_name="Evento", type=ColumnType.OPTION, icon="calendar"
    ),
    ColumnConfig(
        id="familyName", accessor=lambda row: row["family"]["name"], display_name="Famiglia", type=ColumnType.TEXT, icon="users"
    ),
    ColumnConfig(
        id="status",
        accessor=lambda row: row["status"],
        display_name="Stato Iscrizione",
        type=ColumnType.OPTION,
        options=STATUS_OPTIONS,
        icon="check-circle",
    ),
    ColumnConfig(
        id="paymentStatus",
        accessor=lambda row: row["paymentStatus"],
        display_name="Stato Pagamento",
        type=ColumnType.OPTION,
        options=PAYMENT_STATUS_OPTIONS,
        icon="credit-card",
    ),
    ColumnConfig(
        id="registrationDate",
        accessor=lambda row: _date_or_none(row.get("registrationDate")),
        display_name="Data Iscrizione",
        type=ColumnType.DATE,
        icon="calendar",
    ),
    ColumnConfig(
        id="eventStartDate",
        accessor=lambda row: _date_or_none(row["event"].get("startDate")),
        display_name="Data Evento",
        type=ColumnType.DATE,
        icon="calendar",
    ),
]


def create_event_options(events: Iterable[Mapping[str, Any]] = ()) -> list[ColumnOption]:
    """Build eventTitle options from events returned by the API.

    The title is used as value to match the eventTitle accessor.
    """
    return [ColumnOption(label=event["title"], value=event["title"], icon="calendar") for event in events]


def event_title_filter(title: str | None) -> list[FilterState]:
    """Default filters for a registrations view opened from an event page."""
    if not title:
        return []
    return [FilterState(column_id="eventTitle", type=ColumnType.OPTION, operator=OptionOperator.IS, values=(title,))]
