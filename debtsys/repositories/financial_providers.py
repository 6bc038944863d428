from debtsys.models.schemas.financial_provider import FinancialProvider, FinancialProviderCatalog
from debtsys.repositories.base import JpaRepository, with_self_key
from debtsys.services.hal import decode_relation


def to_financial_provider(data: dict) -> FinancialProvider:
    data = with_self_key(data, "financialProvider", "code")
    return FinancialProvider.model_validate({
        **data,
        "financialProviderCatalog": decode_relation(
            data.get("financialProviderCatalog"), "financialProviderCatalog", "id"
        ),
    })


def to_financial_provider_catalog(data: dict) -> FinancialProviderCatalog:
    data = with_self_key(data, "financialProviderCatalog", "id")
    return FinancialProviderCatalog.model_validate({
        **data,
        "financialProviders": [p for p in data.get("financialProviders") or [] if isinstance(p, str)],
    })


class FinancialProviderRepository(JpaRepository[FinancialProvider]):
    resource_name = "financialProvider"
    key_field = "code"
    relations = {"financial_provider_catalog": "financialProviderCatalog"}
    user_scoped = True
    normalize = to_financial_provider


class FinancialProviderCatalogRepository(JpaRepository[FinancialProviderCatalog]):
    resource_name = "financialProviderCatalog"
    key_field = "id"
    normalize = to_financial_provider_catalog
