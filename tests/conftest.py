"""Shared pytest fixtures."""

from datetime import datetime

import pytest

from tablefilter.core.modules.column.models import ColumnConfig, ColumnOption, ColumnType
from tablefilter.core.modules.column.registry import ColumnRegistry


@pytest.fixture
def status_options():
    """Registration status options."""
    return [
        ColumnOption(label="In attesa", value="pending"),
        ColumnOption(label="Confermata", value="confirmed"),
        ColumnOption(label="Cancellata", value="cancelled"),
        ColumnOption(label="Lista d'attesa", value="waitlist"),
    ]


@pytest.fixture
def columns_config(status_options):
    """Create column configs covering every column type."""
    return [
        ColumnConfig(id="name", accessor=lambda row: row.get("name"), display_name="Nome", type=ColumnType.TEXT),
        ColumnConfig(
            id="status",
            accessor=lambda row: row.get("status"),
            display_name="Stato",
            type=ColumnType.OPTION,
            options=status_options,
        ),
        ColumnConfig(
            id="tags",
            accessor=lambda row: row.get("tags"),
            display_name="Tag",
            type=ColumnType.MULTI_OPTION,
            options=[ColumnOption(label=tag, value=tag) for tag in ("sport", "music", "camp")],
        ),
        ColumnConfig(id="eventStartDate", accessor=lambda row: row.get("eventStartDate"), display_name="Data", type=ColumnType.DATE),
        ColumnConfig(
            id="registrationDate", accessor=lambda row: row.get("registrationDate"), display_name="Iscrizione", type=ColumnType.DATE
        ),
        ColumnConfig(id="age", accessor=lambda row: row.get("age"), display_name="Età", type=ColumnType.NUMBER),
        # No static options, filled by the runtime options map
        ColumnConfig(id="eventTitle", accessor=lambda row: row.get("eventTitle"), display_name="Evento", type=ColumnType.OPTION),
    ]


@pytest.fixture
def registry(columns_config):
    """Create a registry without runtime options."""
    return ColumnRegistry(columns_config)


@pytest.fixture
def rows():
    """Create rows shaped like registration list items."""
    return [
        {
            "name": "Rossi",
            "status": "pending",
            "tags": ["sport", "camp"],
            "eventStartDate": datetime(2024, 6, 15, 9, 30),
            "registrationDate": datetime(2024, 2, 1),
            "age": 8,
        },
        {
            "name": "Bianchi",
            "status": "confirmed",
            "tags": ["music"],
            "eventStartDate": datetime(2024, 7, 1),
            "registrationDate": datetime(2023, 12, 20),
            "age": 11,
        },
        {
            "name": None,
            "status": "waitlist",
            "tags": [],
            "eventStartDate": None,
            "registrationDate": datetime(2024, 3, 10),
            "age": None,
        },
    ]
