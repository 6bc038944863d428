from pydantic import Field, model_validator
from datetime import datetime, date
from debtsys.models.schemas.base import WireModel, Relation


class Debt(WireModel):
    id: int | None = None
    description: str
    operation_date: date | None = None
    current_installment: int = Field(ge=0)
    max_financing_term: int = Field(ge=0)
    original_amount: float
    monthly_payment: float
    active: bool = True
    debt_account: Relation | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @model_validator(mode="after")
    def _installment_within_term(self) -> "Debt":
        if self.current_installment > self.max_financing_term:
            raise ValueError("current_installment cannot exceed max_financing_term")
        return self

    @property
    def completion_percentage(self) -> float:
        if self.max_financing_term <= 0:
            return 0.0
        return self.current_installment * 100 / self.max_financing_term


class ExtractedDebt(Debt):
    # Client-side review state, never sent to the backend
    editing: bool = Field(default=False, exclude=True)


class DebtManagementResult(WireModel):
    """Outcome of pay-off / bulk-add calls on an account."""

    affected_debt_ids: list[int] = Field(default_factory=list)
    message: str | None = None
