"""Client-side figures derived from data the backend already computed."""

from typing import Iterable, Sequence, TypeVar
import pandas as pd
from pydantic import BaseModel
from debtsys.models.schemas.debt import Debt
from debtsys.models.schemas.status import AlmostCompletedDebt, UserStatusDashboard

ALMOST_COMPLETED_THRESHOLD = 80.0
RECOMMENDED_DEBT_TO_INCOME = 36.0
UNKNOWN_ACCOUNT = "unknown"

D = TypeVar("D", Debt, AlmostCompletedDebt)


class FinancialOverview(BaseModel):
    available_income: float
    debt_to_income_ratio: float
    expense_to_income_ratio: float
    over_recommended_ratio: bool


def completion_percentage(current_installment: int, max_financing_term: int) -> float:
    if max_financing_term <= 0:
        return 0.0
    return current_installment * 100 / max_financing_term


def _installments_frame(debts: Sequence[D]) -> pd.DataFrame:
    df = pd.DataFrame(
        {
            "position": range(len(debts)),
            "current": [d.current_installment for d in debts],
            "term": [d.max_financing_term for d in debts],
        }
    )
    df["completion"] = 0.0
    has_term = df["term"] > 0
    df.loc[has_term, "completion"] = df.loc[has_term, "current"] * 100 / df.loc[has_term, "term"]
    return df


def almost_completed(debts: Iterable[D], threshold: float = ALMOST_COMPLETED_THRESHOLD) -> list[D]:
    """Debts at or above ``threshold`` percent paid, most advanced first."""
    debts = list(debts)
    if not debts:
        return []
    df = _installments_frame(debts)
    df = df[df["completion"] >= threshold].sort_values("completion", ascending=False, kind="stable")
    return [debts[i] for i in df["position"]]


def _account_code(debt: Debt) -> str:
    return debt.debt_account.key if debt.debt_account else UNKNOWN_ACCOUNT


def debts_by_account(debts: Iterable[Debt]) -> dict[str, list[Debt]]:
    debts = list(debts)
    if not debts:
        return {}
    df = pd.DataFrame({"position": range(len(debts)), "account": [_account_code(d) for d in debts]})
    return {
        account: [debts[i] for i in group["position"]]
        for account, group in df.groupby("account", sort=True)
    }


def monthly_payment_by_account(debts: Iterable[Debt], active_only: bool = True) -> dict[str, float]:
    rows = [
        {"account": _account_code(d), "monthly_payment": d.monthly_payment}
        for d in debts
        if d.active or not active_only
    ]
    if not rows:
        return {}
    df = pd.DataFrame(rows)
    totals = df.groupby("account")["monthly_payment"].sum().to_dict()
    return {k: round(float(v), 2) for k, v in totals.items()}


def financial_overview(dashboard: UserStatusDashboard) -> FinancialOverview:
    salary = dashboard.salary
    debt_payments = dashboard.monthly_debt_payment_amount
    fixed_expenses = dashboard.monthly_fixed_expenses_amount

    debt_ratio = debt_payments * 100 / salary if salary > 0 else 0.0
    expense_ratio = fixed_expenses * 100 / salary if salary > 0 else 0.0

    return FinancialOverview(
        available_income=round(salary - debt_payments - fixed_expenses, 2),
        debt_to_income_ratio=round(debt_ratio, 2),
        expense_to_income_ratio=round(expense_ratio, 2),
        over_recommended_ratio=debt_ratio > RECOMMENDED_DEBT_TO_INCOME,
    )
