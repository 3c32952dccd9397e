from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from connections.file_store import FileStore
from services.reports import ReportService, month_window, training_value


@pytest.mark.parametrize(
    "today, months_back, expected",
    [
        (date(2026, 3, 15), 0, (date(2026, 3, 1), date(2026, 3, 31))),
        (date(2026, 3, 31), 1, (date(2026, 2, 1), date(2026, 2, 28))),
        (date(2026, 1, 31), 1, (date(2025, 12, 1), date(2025, 12, 31))),
        (date(2026, 3, 15), 5, (date(2025, 10, 1), date(2025, 10, 31))),
        (date(2028, 3, 1), 1, (date(2028, 2, 1), date(2028, 2, 29))),
    ],
)
def test_month_window(today, months_back, expected):
    assert month_window(today, months_back) == expected


def test_training_value_uses_inclusive_days():
    training = {
        "start_date": "2026-03-20",
        "end_date": "2026-03-22",
        "prices": {"trainer_per_day": 1000, "lab_per_day": 200, "platform_per_day": 100},
    }
    assert training_value(training, "prices") == Decimal("3900")
    assert training_value(training, "costs") == 0
    assert training_value({"id": "t", "prices": {"trainer_per_day": 5}}, "prices") == 0


@pytest.fixture
def seeded(data_dir):
    FileStore.write("trainings", [
        {
            "id": "t1",
            "created_at": "2026-03-10T09:00:00.000Z",
            "start_date": "2026-03-20",
            "end_date": "2026-03-22",
            "costs": {"trainer_per_day": 600, "lab_per_day": 100, "platform_per_day": 50},
            "prices": {"trainer_per_day": 1000, "lab_per_day": 200, "platform_per_day": 100},
        },
        {
            "id": "t2",
            "created_at": "2026-01-05T12:30:00.000Z",
            "start_date": "2026-01-12",
            "end_date": "2026-01-12",
            "costs": {},
            "prices": {"trainer_per_day": 500},
        },
        {
            "id": "t3",
            "created_at": "2025-09-30T23:00:00.000Z",
            "start_date": "2025-10-01",
            "end_date": "2025-10-02",
            "prices": {"trainer_per_day": 9999},
        },
    ])
    FileStore.write("quotations", [
        {"id": "q1", "created_at": "2026-03-01T00:00:00.000Z"},
        {"id": "q2", "created_at": "2026-02-14T08:00:00.000Z"},
    ])
    FileStore.write("leads", [
        {"id": "l1", "created_at": "2026-03-02T10:00:00.000Z"},
        {"id": "l2", "created_at": "2026-03-31T18:00:00.000Z"},
        {"id": "l3", "created_at": "not a date"},
    ])
    return data_dir


def test_monthly_stats(seeded):
    stats = ReportService().monthly_stats(today=date(2026, 3, 15))

    assert [(s.month, s.year) for s in stats] == [
        ("Oct", 2025), ("Nov", 2025), ("Dec", 2025), ("Jan", 2026), ("Feb", 2026), ("Mar", 2026),
    ]

    march = stats[-1]
    assert march.revenue == 3900.0
    assert march.profit == 1650.0
    assert march.trainings == 1
    assert march.quotations == 1
    assert march.leads == 2

    january = stats[3]
    assert january.revenue == 500.0
    assert january.profit == 500.0
    assert stats[4].quotations == 1

    assert sum(s.trainings for s in stats) == 2
    assert stats[0].revenue == 0.0


def test_monthly_endpoint_shape(client):
    stats = client.get("/api/reports/monthly").json()

    assert len(stats) == 6
    assert set(stats[0]) == {"month", "year", "revenue", "profit", "trainings", "quotations", "leads"}


def test_monthly_export_is_xlsx(client):
    client.post("/api/leads", json={"company_name": "Initech", "contact_person": "P. Gibbons"})

    response = client.get("/api/reports/monthly/export")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert ".xlsx" in response.headers["content-disposition"]
    assert response.content.startswith(b"PK")
