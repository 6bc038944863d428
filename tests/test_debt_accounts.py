import pytest

from debtsys.api.errors import HttpStatusError
from debtsys.models.enums import AccountStatementType
from debtsys.models.schemas.base import Relation
from debtsys.models.schemas.debt_account import DebtAccount


def test_debt_account_crud_flow(debtsys, backend, session):
    # --- Create ---
    account = DebtAccount(
        code="BBVA-01",
        name="BBVA Azul",
        pay_day=15,
        credit=30000,
        account_statement_type=AccountStatementType.universal,
        financial_provider=Relation(resource="financialProvider", key="BBVA"),
    )
    created = debtsys.debt_accounts.create(account, session)
    assert created.code == "BBVA-01"
    assert created.created_at is not None

    sent = backend.last_call("POST", "/jpa/debtAccount")["json"]
    assert sent["payDay"] == 15
    assert sent["accountStatementType"] == "UNIVERSAL"
    assert sent["financialProvider"] == "/jpa/financialProvider/BBVA"
    assert sent["debtSysUser"] == "/jpa/user/jane@example.com"
    assert "createdAt" not in sent

    # --- Read back ---
    found = debtsys.debt_accounts.find_by_key("BBVA-01")
    assert found.name == "BBVA Azul"
    assert found.pay_day == 15
    assert found.credit == 30000
    assert found.account_statement_type is AccountStatementType.universal
    assert found.financial_provider.key == "BBVA"

    # --- Update keeps the key ---
    renamed = found.model_copy(update={"code": "SOMETHING-ELSE", "name": "BBVA Oro"})
    updated = debtsys.debt_accounts.update("BBVA-01", renamed, session)
    assert updated.code == "BBVA-01"
    assert updated.name == "BBVA Oro"
    put = backend.last_call("PUT")
    assert put["path"] == "/jpa/debtAccount/BBVA-01"
    assert put["json"]["code"] == "BBVA-01"
    assert "SOMETHING-ELSE" not in backend.store["debtAccount"]

    # --- Delete ---
    debtsys.debt_accounts.delete("BBVA-01")
    assert debtsys.debt_accounts.find_by_key("BBVA-01") is None


def test_find_all_unwraps_embedded(debtsys, account):
    accounts = debtsys.debt_accounts.find_all()
    assert [a.code for a in accounts] == ["ACC1"]


def test_find_all_on_empty_collection_is_empty_list(debtsys):
    assert debtsys.debt_accounts.find_all() == []


def test_missing_account_is_none(debtsys):
    assert debtsys.debt_accounts.find_by_key("NOPE") is None


def test_server_error_on_lookup_propagates(debtsys, backend, account):
    backend.failures[("GET", "/jpa/debtAccount/ACC1")] = 500

    with pytest.raises(HttpStatusError) as exc:
        debtsys.debt_accounts.find_by_key("ACC1")
    assert exc.value.status_code == 500


def test_failed_create_propagates_without_retry(debtsys, backend, session):
    backend.failures[("POST", "/jpa/debtAccount")] = 500
    account = DebtAccount(code="X1", name="Broken", pay_day=1, credit=0)

    with pytest.raises(HttpStatusError):
        debtsys.debt_accounts.create(account, session)
    posts = [c for c in backend.calls if c["method"] == "POST"]
    assert len(posts) == 1


def test_duplicate_code_is_rejected(debtsys, account, session):
    duplicate = DebtAccount(code="ACC1", name="Again", pay_day=3, credit=10)

    with pytest.raises(HttpStatusError) as exc:
        debtsys.debt_accounts.create(duplicate, session)
    assert exc.value.status_code == 409


def test_create_without_session_is_refused(debtsys, backend):
    account = DebtAccount(code="X2", name="Nobody", pay_day=1, credit=0)

    with pytest.raises(ValueError):
        debtsys.debt_accounts.create(account)
    assert backend.calls == []


def test_invalid_pay_day_fails_before_any_request():
    with pytest.raises(ValueError):
        DebtAccount(code="X3", name="Bad", pay_day=32, credit=0)


def test_patch_sends_only_changes(debtsys, backend, account, session):
    patched = debtsys.debt_accounts.patch("ACC1", {"credit": 40000, "code": "IGNORED"}, session)

    assert patched.credit == 40000
    assert patched.code == "ACC1"
    assert backend.last_call("PATCH")["json"] == {
        "credit": 40000,
        "debtSysUser": "/jpa/user/jane@example.com",
    }


@pytest.mark.parametrize("style", ["object", "uri", "link", "omit"])
def test_financial_provider_relation_decodes_from_any_shape(debtsys, backend, account, style):
    backend.seed("financialProvider", {"code": "BBVA", "name": "BBVA", "active": True})
    backend.store["debtAccount"]["ACC1"]["financialProvider"] = "/jpa/financialProvider/BBVA"
    backend.relation_style = style

    found = debtsys.debt_accounts.find_by_key("ACC1")
    if style == "omit":
        assert found.financial_provider is None
    else:
        assert found.financial_provider.key == "BBVA"
        assert found.financial_provider.uri == "/jpa/financialProvider/BBVA"


def test_account_status(debtsys, seeded_debts):
    status = debtsys.debt_accounts.get_status("ACC1")

    assert status.debt_account.code == "ACC1"
    assert status.month_payment == 250.0
    assert sorted(d.description for d in status.debts) == ["Laptop", "Phone"]
    assert [d.description for d in status.almost_completed_debts] == ["Laptop"]
    assert status.almost_completed_debts[0].completion_percentage == 80.0


def test_account_status_for_missing_account_raises(debtsys):
    with pytest.raises(HttpStatusError) as exc:
        debtsys.debt_accounts.get_status("NOPE")
    assert exc.value.is_not_found
