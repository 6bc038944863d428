from pydantic import Field
from debtsys.models.schemas.base import WireModel
from debtsys.models.schemas.debt import Debt
from debtsys.models.schemas.debt_account import DebtAccount
from debtsys.models.schemas.fixed_expense import FixedExpense


class AlmostCompletedDebt(WireModel):
    code: str | None = None
    description: str
    monthly_payment: float
    current_installment: int
    max_financing_term: int

    @property
    def completion_percentage(self) -> float:
        if self.max_financing_term <= 0:
            return 0.0
        return self.current_installment * 100 / self.max_financing_term


class DebtAccountStatus(WireModel):
    debt_account: DebtAccount | None = None
    month_payment: float = 0
    debts: list[Debt] = Field(default_factory=list)
    almost_completed_debts: list[AlmostCompletedDebt] = Field(default_factory=list)
    message: str | None = None   # set when the backend answers with plain text


class UserStatusDashboard(WireModel):
    salary: float = 0
    savings: float = 0
    monthly_debt_payment_amount: float = 0
    monthly_fixed_expenses_amount: float = 0
    user_debt_accounts: list[DebtAccount] = Field(default_factory=list)
    almost_completed_debts: list[AlmostCompletedDebt] = Field(default_factory=list)
    user_fixed_expenses: list[FixedExpense] = Field(default_factory=list)
