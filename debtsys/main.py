import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

import httpx
from fastapi import FastAPI, Query

from debtsys.api.client import HttpClient
from debtsys.config import Settings, get_settings
from debtsys.logging import setup_logging
from debtsys.models.enums import LogLevel
from debtsys.models.schemas.user import Session
from debtsys.repositories.debt_accounts import DebtAccountRepository
from debtsys.repositories.debts import DebtRepository
from debtsys.repositories.financial_providers import (
    FinancialProviderCatalogRepository,
    FinancialProviderRepository,
)
from debtsys.repositories.fixed_expenses import FixedExpenseCatalogRepository, FixedExpenseRepository
from debtsys.repositories.users import UserRepository
from debtsys.services.error_log import ErrorLog, ErrorLogHandler

logger = logging.getLogger(__name__)


class DebtSys:
    """Wires settings, the HTTP client and every repository together."""

    def __init__(self, settings: Optional[Settings] = None, http: Optional[httpx.Client] = None) -> None:
        self.settings = settings or get_settings()
        self.client = HttpClient.from_settings(self.settings, session=http)
        self.error_log = ErrorLog(self.settings.error_log_capacity)

        self.debt_accounts = DebtAccountRepository(self.client)
        self.debts = DebtRepository(self.client)
        self.financial_providers = FinancialProviderRepository(self.client)
        self.financial_provider_catalogs = FinancialProviderCatalogRepository(self.client)
        self.fixed_expenses = FixedExpenseRepository(self.client)
        self.fixed_expense_catalogs = FixedExpenseCatalogRepository(self.client)
        self.users = UserRepository(self.client)

    def default_session(self) -> Optional[Session]:
        if self.settings.default_user_email is None:
            return None
        return Session(user_email=self.settings.default_user_email)

    def capture_errors(self, logger_name: str = "debtsys") -> ErrorLogHandler:
        handler = ErrorLogHandler(self.error_log)
        logging.getLogger(logger_name).addHandler(handler)
        return handler

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "DebtSys":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def create_app(settings: Optional[Settings] = None, error_log: Optional[ErrorLog] = None) -> FastAPI:
    settings = settings or get_settings()
    error_log = error_log or ErrorLog(settings.error_log_capacity)
    started = time.monotonic()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level, settings.log_format)
        handler = ErrorLogHandler(error_log)
        logging.getLogger("debtsys").addHandler(handler)
        logger.info("debtsys started (env=%s, backend=%s)", settings.app_env, settings.api_base_url)
        yield
        logging.getLogger("debtsys").removeHandler(handler)

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings
    app.state.error_log = error_log

    @app.get("/health")
    def health():
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.monotonic() - started, 3),
            "environment": settings.app_env,
            "api_base_url": settings.api_base_url,
        }

    @app.get("/errors")
    def list_errors(
        level: LogLevel | None = Query(None),
        limit: int = Query(50, ge=1, le=500),
        offset: int = Query(0, ge=0),
    ):
        entries = error_log.entries(level)
        return {
            "total": len(entries),
            "items": [e.model_dump(mode="json") for e in entries[offset: offset + limit]],
        }

    @app.delete("/errors")
    def clear_errors():
        error_log.clear()
        return {"message": "Error log cleared"}

    return app
