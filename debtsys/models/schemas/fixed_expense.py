from pydantic import Field
from debtsys.models.schemas.base import WireModel, Relation


class FixedExpense(WireModel):
    id: int | None = None
    name: str
    monthly_cost: float = Field(ge=0)
    payment_day: int = Field(ge=1, le=31)
    active: bool = True
    fixed_expense_catalog: Relation | None = None
    debt_sys_user: Relation | None = None


class FixedExpenseCatalog(WireModel):
    id: int | None = None
    name: str
    fixed_expenses: list[str] = Field(default_factory=list)   # expense URIs
