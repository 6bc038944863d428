from debtsys.models.schemas.debt_account import DebtAccount
from debtsys.models.schemas.status import DebtAccountStatus
from debtsys.repositories.base import JpaRepository, path_key, with_self_key
from debtsys.repositories.debts import to_debt
from debtsys.services.hal import decode_relation


def to_debt_account(data: dict) -> DebtAccount:
    data = with_self_key(data, "debtAccount", "code")
    return DebtAccount.model_validate({
        **data,
        "financialProvider": decode_relation(data.get("financialProvider"), "financialProvider", "code"),
    })


def to_account_status(data) -> DebtAccountStatus:
    if isinstance(data, str):
        return DebtAccountStatus(message=data)
    account = data.get("debtAccount")
    return DebtAccountStatus.model_validate({
        **data,
        "debtAccount": to_debt_account(account) if account else None,
        "debts": [to_debt(d) for d in data.get("debts") or []],
        "almostCompletedDebts": data.get("almostCompletedDebts") or [],
    })


class DebtAccountRepository(JpaRepository[DebtAccount]):
    resource_name = "debtAccount"
    key_field = "code"
    relations = {"financial_provider": "financialProvider"}
    user_scoped = True
    normalize = to_debt_account

    def get_status(self, code: str) -> DebtAccountStatus:
        data = self.client.get(f"/debt/account/status/{path_key(code)}")
        return to_account_status(data)
