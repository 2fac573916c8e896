import datetime as dt

import pytest
from fastapi.testclient import TestClient

from spa_api.api.deps import get_period_resolver, get_record_store
from spa_api.core.auth import Identity, get_identity
from spa_api.main import app
from spa_api.repositories.record_store import InMemoryRecordStore
from spa_api.services.period_resolver import PeriodResolver

BUSINESS_TZ = "America/Bogota"

# Wednesday 2024-01-10, 15:00 in Bogota (UTC-5)
REFERENCE_NOW = dt.datetime(2024, 1, 10, 20, 0, tzinfo=dt.timezone.utc)


@pytest.fixture
def resolver():
    """Period resolver pinned to REFERENCE_NOW."""
    return PeriodResolver(now=REFERENCE_NOW, tz=BUSINESS_TZ)


@pytest.fixture
def make_appointment():
    counter = iter(range(1, 10_000))

    def _make(worker_id="w1", price=100000, date="2024-01-08", status="completed",
              payment_method="cash", **extra):
        record = {
            "id": f"apt-{next(counter)}",
            "worker_id": worker_id,
            "service_name": "Manicure",
            "price": price,
            "date": date,
            "time": "10:00",
            "status": status,
            "payment_method": payment_method,
        }
        record.update(extra)
        return record

    return _make


@pytest.fixture
def make_loan():
    counter = iter(range(1, 10_000))

    def _make(worker_id="w1", amount=20000, date="2024-01-10", observation="Adelanto"):
        return {
            "id": f"loan-{next(counter)}",
            "worker_id": worker_id,
            "amount": amount,
            "date": date,
            "observation": observation,
        }

    return _make


@pytest.fixture
def workers():
    """Three workers and one admin."""
    return [
        {"id": "w1", "name": "Ana", "role": "worker"},
        {"id": "w2", "name": "Bea", "role": "worker"},
        {"id": "w3", "name": "Carla", "role": "worker"},
        {"id": "a1", "name": "Admin", "role": "admin"},
    ]


@pytest.fixture
def salon_week(workers, make_appointment, make_loan):
    """Records around the week of 2024-01-07..2024-01-13."""
    appointments = [
        make_appointment("w1", 100000, "2024-01-08", payment_method="cash"),
        make_appointment("w1", 50000, "2024-01-08", status="pending", payment_method=None),
        make_appointment("w1", 40000, "2024-01-10", payment_method="transfer", payment_proof="proofs/1.jpg"),
        make_appointment("w2", 60000, "2024-01-10", payment_method="cash"),
        make_appointment("w2", 30000, "2024-01-10", status="cancelled", payment_method=None),
        # previous week
        make_appointment("w2", 80000, "2024-01-05", payment_method="transfer"),
    ]
    loans = [
        make_loan("w1", 20000, "2024-01-10 09:30"),
        make_loan("w2", 90000, "2024-01-12"),
        # previous week
        make_loan("w1", 5000, "2024-01-02"),
    ]
    return InMemoryRecordStore(workers=workers, appointments=appointments, loans=loans)


@pytest.fixture
def client_as(salon_week, resolver):
    """TestClient factory authenticated as the given worker id and role."""
    def _client(worker_id="a1", role="admin", store=None):
        app.dependency_overrides[get_identity] = lambda: Identity(worker_id=worker_id, role=role)
        app.dependency_overrides[get_record_store] = lambda: store or salon_week
        app.dependency_overrides[get_period_resolver] = lambda: resolver
        # no context manager: the Mongo lifespan stays off
        return TestClient(app)

    yield _client
    app.dependency_overrides.clear()
