from pydantic import Field
from datetime import datetime
from debtsys.models.schemas.base import WireModel, Relation


class FinancialProvider(WireModel):
    id: int | None = None
    code: str = Field(min_length=1)
    name: str
    active: bool = True
    financial_provider_catalog: Relation | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class FinancialProviderCatalog(WireModel):
    id: int | None = None
    name: str
    financial_providers: list[str] = Field(default_factory=list)   # provider URIs
