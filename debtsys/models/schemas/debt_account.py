from pydantic import Field
from datetime import datetime
from debtsys.models.enums import AccountStatementType
from debtsys.models.schemas.base import WireModel, Relation


class DebtAccount(WireModel):
    code: str = Field(min_length=1)
    name: str
    pay_day: int = Field(ge=1, le=31)   # day of month the statement is due
    credit: float = Field(ge=0)
    active: bool = True
    account_statement_type: AccountStatementType = AccountStatementType.manual
    financial_provider: Relation | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
