import logging
from typing import Any, Iterable
from debtsys.api.client import FileInput
from debtsys.models.enums import AccountStatementType
from debtsys.models.schemas.base import Relation
from debtsys.models.schemas.debt import Debt, DebtManagementResult, ExtractedDebt
from debtsys.repositories.base import JpaRepository, TIMESTAMP_FIELDS, path_key, with_self_key
from debtsys.services.hal import decode_relation, encode_relation, unwrap_embedded

logger = logging.getLogger(__name__)


def to_debt(data: dict, model: type[Debt] = Debt) -> Debt:
    data = with_self_key(data, "debt", "id")
    return model.model_validate({
        **data,
        "debtAccount": decode_relation(data.get("debtAccount"), "debtAccount", "code"),
    })


def to_extracted_debt(data: dict) -> ExtractedDebt:
    return to_debt(data, ExtractedDebt)


def to_management_result(data: Any) -> DebtManagementResult:
    """
    Normalize pay-off / add responses into one contract.

    The backend answers with a list of debts, a bare status string, an HAL
    collection, or an object already carrying ``affectedDebtIds``.
    """
    if isinstance(data, str):
        return DebtManagementResult(message=data)
    if isinstance(data, dict):
        if "affectedDebtIds" in data:
            return DebtManagementResult.model_validate(data)
        if "_embedded" in data:
            data = unwrap_embedded(data, "debt")
        elif data.get("id") is not None:
            data = [data]
        else:
            return DebtManagementResult(message=data.get("message"))
    ids = [int(d["id"]) for d in data if isinstance(d, dict) and d.get("id") is not None]
    return DebtManagementResult(affected_debt_ids=ids)


class DebtRepository(JpaRepository[Debt]):
    resource_name = "debt"
    key_field = "id"
    relations = {"debt_account": "debtAccount"}
    normalize = to_debt

    def find_by_debt_account_code(self, debt_account_code: str) -> list[Debt]:
        data = self.client.get(f"/jpa/debtAccount/{path_key(debt_account_code)}/debts")
        owner = Relation(resource="debtAccount", key=debt_account_code)
        debts = []
        for item in unwrap_embedded(data, self.resource_name):
            debt = to_debt(item)
            if debt.debt_account is None:
                debt = debt.model_copy(update={"debt_account": owner})
            debts.append(debt)
        return debts

    def pay_off_debts(self, debt_account_code: str) -> DebtManagementResult:
        data = self.client.patch(f"/debt/management/payOff/{path_key(debt_account_code)}")
        result = to_management_result(data)
        logger.info("Paid off %d debts on %s", len(result.affected_debt_ids), debt_account_code)
        return result

    def add_debts_to_account(self, debt_account_code: str, debts: Iterable[Debt]) -> DebtManagementResult:
        account_uri = encode_relation(debt_account_code, "debtAccount")
        payload = []
        for debt in debts:
            item = debt.model_dump(
                by_alias=True, mode="json", exclude=TIMESTAMP_FIELDS | {"debt_account"}, exclude_none=True
            )
            item["debtAccount"] = account_uri
            payload.append(item)
        data = self.client.post(f"/debt/management/add/{path_key(debt_account_code)}", payload)
        logger.info("Added %d debts to %s", len(payload), debt_account_code)
        return to_management_result(data)

    def extract_debts_from_statement(
        self,
        debt_account_code: str,
        file: FileInput,
        statement_type: AccountStatementType | str = AccountStatementType.manual,
    ) -> list[ExtractedDebt]:
        """
        Upload a statement (PDF/CSV/TXT/Excel) and get the candidate debts back.

        Nothing is persisted: the returned debts are for review and go to
        ``add_debts_to_account`` once accepted.
        """
        statement_type = AccountStatementType(statement_type)
        data = self.client.upload_file(
            f"/account/statement/extract/{path_key(debt_account_code)}",
            file,
            params={"accountStatementType": statement_type.value},
        )
        debts = [to_extracted_debt(item) for item in unwrap_embedded(data, self.resource_name)]
        logger.info("Extracted %d debts for %s from %s statement", len(debts), debt_account_code, statement_type.value)
        return debts
