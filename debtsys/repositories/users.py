import logging
from typing import Optional
from debtsys.api.errors import EntityNotFoundError
from debtsys.models.schemas.user import Session, User
from debtsys.models.schemas.status import UserStatusDashboard
from debtsys.repositories.base import JpaRepository, path_key, with_self_key
from debtsys.repositories.debt_accounts import to_debt_account
from debtsys.repositories.fixed_expenses import to_fixed_expense
from debtsys.services.fetchers import fetch_record

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def to_user(data: dict) -> User:
    return User.model_validate(with_self_key(data, "user", "email"))


def to_dashboard(data: dict) -> UserStatusDashboard:
    return UserStatusDashboard.model_validate({
        **data,
        "userDebtAccounts": [to_debt_account(a) for a in data.get("userDebtAccounts") or []],
        "userFixedExpenses": [to_fixed_expense(e) for e in data.get("userFixedExpenses") or []],
        "almostCompletedDebts": data.get("almostCompletedDebts") or [],
    })


class UserRepository(JpaRepository[User]):
    resource_name = "user"
    key_field = "email"
    normalize = to_user

    def find_by_key(self, key: str) -> Optional[User]:
        return self.find_by_email(normalize_email(key))

    def find_by_email(self, email: str) -> Optional[User]:
        """Active user with this email, or None."""
        return fetch_record(
            self.client,
            f"{self.collection_path}/search/findByEmailAndActiveTrue",
            to_user,
            params={"email": normalize_email(email)},
        )

    def update(self, key: str, entity: User, session: Optional[Session] = None) -> User:
        key = normalize_email(key)
        if self.find_by_email(key) is None:
            logger.warning("Refusing to update unknown user %s", key)
            raise EntityNotFoundError(f"User '{key}' not found")
        return super().update(key, entity, session)

    def get_financial_status(self, email: str) -> UserStatusDashboard:
        data = self.client.get(f"/financial/status/{path_key(normalize_email(email))}")
        return to_dashboard(data)
