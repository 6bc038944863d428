from debtsys.models.schemas.base import Relation
from debtsys.models.schemas.debt import Debt
from debtsys.models.schemas.status import AlmostCompletedDebt, UserStatusDashboard
from debtsys.services.summaries import (
    UNKNOWN_ACCOUNT,
    almost_completed,
    completion_percentage,
    debts_by_account,
    financial_overview,
    monthly_payment_by_account,
)


def debt(description, current, term, monthly=100.0, account="ACC1", active=True):
    return Debt(
        description=description,
        current_installment=current,
        max_financing_term=term,
        original_amount=monthly * term,
        monthly_payment=monthly,
        active=active,
        debt_account=Relation(resource="debtAccount", key=account) if account else None,
    )


def test_completion_percentage():
    assert completion_percentage(8, 10) == 80.0
    assert completion_percentage(1, 3) == 100 / 3
    assert completion_percentage(0, 0) == 0.0


def test_almost_completed_includes_threshold_and_sorts():
    debts = [debt("Phone", 2, 12), debt("Laptop", 8, 10), debt("Bike", 9, 10), debt("Free", 0, 0)]

    result = almost_completed(debts)
    assert [d.description for d in result] == ["Bike", "Laptop"]


def test_almost_completed_custom_threshold_and_read_models():
    rows = [
        AlmostCompletedDebt(description="A", monthly_payment=10, current_installment=5, max_financing_term=10),
        AlmostCompletedDebt(description="B", monthly_payment=10, current_installment=4, max_financing_term=10),
    ]
    assert [d.description for d in almost_completed(rows, threshold=50)] == ["A"]
    assert almost_completed([]) == []


def test_debts_by_account():
    debts = [debt("TV", 1, 6, account="B2"), debt("Sofa", 2, 6, account="A1"), debt("Loose", 1, 2, account=None)]

    grouped = debts_by_account(debts)
    assert list(grouped) == ["A1", "B2", UNKNOWN_ACCOUNT]
    assert [d.description for d in grouped["B2"]] == ["TV"]


def test_monthly_payment_by_account():
    debts = [
        debt("TV", 1, 6, monthly=120.5, account="A1"),
        debt("Sofa", 2, 6, monthly=79.5, account="A1"),
        debt("Car", 10, 48, monthly=300, account="B2"),
        debt("Old", 6, 6, monthly=999, account="B2", active=False),
    ]

    assert monthly_payment_by_account(debts) == {"A1": 200.0, "B2": 300.0}
    assert monthly_payment_by_account(debts, active_only=False) == {"A1": 200.0, "B2": 1299.0}
    assert monthly_payment_by_account([]) == {}


def test_financial_overview():
    dashboard = UserStatusDashboard(
        salary=5000,
        savings=12000,
        monthly_debt_payment_amount=2000,
        monthly_fixed_expenses_amount=1200,
    )

    overview = financial_overview(dashboard)
    assert overview.available_income == 1800.0
    assert overview.debt_to_income_ratio == 40.0
    assert overview.expense_to_income_ratio == 24.0
    assert overview.over_recommended_ratio is True


def test_financial_overview_without_salary():
    overview = financial_overview(UserStatusDashboard(monthly_debt_payment_amount=100))

    assert overview.debt_to_income_ratio == 0.0
    assert overview.available_income == -100.0
    assert overview.over_recommended_ratio is False
