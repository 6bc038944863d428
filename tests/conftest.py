# tests/conftest.py
import os

# --- Configure env for tests *before* importing app code ---
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("API_BASE_URL", "http://testserver")
os.environ.setdefault("DEFAULT_USER_EMAIL", "jane@example.com")

import pytest
from fastapi.testclient import TestClient

from debtsys.config import Settings
from debtsys.main import DebtSys
from debtsys.models.schemas.user import Session
from fake_backend import FakeBackend

USER_EMAIL = "jane@example.com"


@pytest.fixture
def backend():
    backend = FakeBackend()
    backend.seed("user", {
        "email": USER_EMAIL,
        "name": "Jane",
        "salary": 5000.0,
        "savings": 12000.0,
        "active": True,
    })
    return backend


@pytest.fixture
def settings():
    return Settings(APP_ENV="test", API_BASE_URL="http://testserver", DEFAULT_USER_EMAIL=USER_EMAIL)


@pytest.fixture
def debtsys(backend, settings):
    with TestClient(backend.app) as http:
        with DebtSys(settings, http=http) as system:
            yield system


@pytest.fixture
def session():
    return Session(user_email=USER_EMAIL)


@pytest.fixture
def account(backend, session):
    return backend.seed("debtAccount", {
        "code": "ACC1",
        "name": "Visa Gold",
        "payDay": 10,
        "credit": 25000.0,
        "active": True,
        "accountStatementType": "MANUAL",
        "financialProvider": None,
        "debtSysUser": f"/jpa/user/{session.user_email}",
    })


@pytest.fixture
def seeded_debts(backend, account):
    uri = f"/jpa/debtAccount/{account['code']}"
    return [
        backend.seed("debt", {
            "description": "Laptop",
            "operationDate": "2024-01-15",
            "currentInstallment": 8,
            "maxFinancingTerm": 10,
            "originalAmount": 1500.0,
            "monthlyPayment": 150.0,
            "active": True,
            "debtAccount": uri,
        }),
        backend.seed("debt", {
            "description": "Phone",
            "operationDate": "2024-03-01",
            "currentInstallment": 2,
            "maxFinancingTerm": 12,
            "originalAmount": 1200.0,
            "monthlyPayment": 100.0,
            "active": True,
            "debtAccount": uri,
        }),
    ]
