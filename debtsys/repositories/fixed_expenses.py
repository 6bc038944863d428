from debtsys.models.schemas.fixed_expense import FixedExpense, FixedExpenseCatalog
from debtsys.repositories.base import JpaRepository, with_self_key
from debtsys.services.hal import decode_relation


def to_fixed_expense(data: dict) -> FixedExpense:
    data = with_self_key(data, "fixedExpense", "id")
    return FixedExpense.model_validate({
        **data,
        "fixedExpenseCatalog": decode_relation(data.get("fixedExpenseCatalog"), "fixedExpenseCatalog", "id"),
        "debtSysUser": decode_relation(data.get("debtSysUser"), "user", "email"),
    })


def to_fixed_expense_catalog(data: dict) -> FixedExpenseCatalog:
    data = with_self_key(data, "fixedExpenseCatalog", "id")
    return FixedExpenseCatalog.model_validate({
        **data,
        "fixedExpenses": [e for e in data.get("fixedExpenses") or [] if isinstance(e, str)],
    })


class FixedExpenseRepository(JpaRepository[FixedExpense]):
    resource_name = "fixedExpense"
    key_field = "id"
    relations = {"fixed_expense_catalog": "fixedExpenseCatalog"}
    user_scoped = True
    normalize = to_fixed_expense

    def find_by_user(self, email: str) -> list[FixedExpense]:
        email = email.strip().lower()
        return [
            e for e in self.find_all()
            if e.debt_sys_user is not None and e.debt_sys_user.key.lower() == email
        ]


class FixedExpenseCatalogRepository(JpaRepository[FixedExpenseCatalog]):
    resource_name = "fixedExpenseCatalog"
    key_field = "id"
    normalize = to_fixed_expense_catalog
