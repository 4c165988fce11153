"""Shared fixtures for the ZaiBoost test suite."""

import os

# Secrets must be present BEFORE the package is imported: Settings reads
# the environment once, and create_app refuses to start without them.
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("ENCRYPTION_KEY", "test-encryption-key-32-bytes-long")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from zaiboost_api.app.core.security import create_access_token, hash_password
from zaiboost_api.app.core.store import DEFAULT_CATALOG, Ledger, MemoryWriter, set_ledger
from zaiboost_api.app.main import create_app


# =============================================================================
# LEDGER FIXTURES
# =============================================================================


@pytest.fixture
def writer():
    return MemoryWriter()


@pytest.fixture
def ledger(writer):
    """Fresh ledger with the default catalog, shared with the API."""
    ledger = Ledger(writer)
    ledger.seed_catalog(DEFAULT_CATALOG)
    set_ledger(ledger)
    yield ledger
    set_ledger(None)


@pytest.fixture
def customer(ledger):
    return ledger.add_user("traveler", hash_password("paimon123"), role="customer")


@pytest.fixture
def other_customer(ledger):
    return ledger.add_user("rover", hash_password("echoes123"), role="customer")


@pytest.fixture
def admin(ledger):
    return ledger.add_user("admin", hash_password("admin123"), role="admin")


def token_for(user) -> str:
    return create_access_token({"id": user.id, "username": user.username, "role": user.role})


def bearer(user) -> dict:
    return {"Authorization": f"Bearer {token_for(user)}"}


@pytest.fixture
def customer_headers(customer):
    return bearer(customer)


@pytest.fixture
def other_headers(other_customer):
    return bearer(other_customer)


@pytest.fixture
def admin_headers(admin):
    return bearer(admin)


# =============================================================================
# APP & CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def app(ledger):
    return create_app(ledger=ledger)


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def order_payload():
    """A 7-day Genshin daily order (service 1: 5000 per day)."""
    return {
        "service_id": 1,
        "uid": "812345678",
        "server": "Asia",
        "game_username": "traveler@mail.com",
        "game_password": "hunter2!",
        "start_value": 0,
        "target_value": 7,
        "total_price": 35000,
        "notes": "Please skip the weekly boss",
    }
