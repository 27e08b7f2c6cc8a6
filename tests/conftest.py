import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from Store_module.record_store import RecordStore


def make_settings(**overrides) -> Settings:
    values = {
        "DATABASE_URL": "sqlite://",
        "ENVIRONMENT": "development",
        "ALLOWED_ORIGINS": "",
        "HEALTH_VERBOSE": True,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def store():
    record_store = RecordStore("sqlite://")
    record_store.connect()
    record_store.create_schema()
    yield record_store
    record_store.close()


@pytest.fixture
def app(settings, store):
    return create_app(settings, store)


@pytest.fixture
def client(app):
    # No context manager: lifespan (migrations, store close) is exercised separately
    return TestClient(app)


@pytest.fixture
def valid_enquiry():
    return {
        "name": "Asha Rao",
        "email": "asha@example.com",
        "phone": "+91 98450 00000",
        "subject": "Property dispute",
        "message": "I would like advice on a tenancy matter.",
    }


@pytest.fixture
def valid_appointment():
    return {
        "name": "Vikram Shetty",
        "email": "vikram@example.com",
        "phone": "+91 99000 11111",
        "preferredDate": "2025-03-14",
        "preferredTime": "10:30 AM",
        "purpose": "Contract review",
    }
