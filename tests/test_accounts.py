"""
Tests for registration, login and session handling.
"""
import pytest
from unittest.mock import patch
from cardcraft.accounts.service import AccountService, username_from_phone
from cardcraft.utils.ids import new_timestamp_id
from cardcraft.storage.kv_store import SESSION_KEY, USERS_KEY
from cardcraft.storage.models import AccountType
from cardcraft.utils.errors import DuplicatePhoneError, InvalidCredentialsError

def test_username_is_digits_of_phone():
    assert username_from_phone("+1 (555) 010-2030") == "15550102030"
    assert username_from_phone("555.123.4567") == "5551234567"

@pytest.mark.parametrize("phone", ["+1 (555) 010-2030", "555-0000", "44 20 7946 0958"])
def test_register_creates_session(accounts, phone):
    account = accounts.register(phone, "secret", "Jane", AccountType.INDIVIDUAL)

    session = accounts.current_session()
    assert session is not None
    assert session.id == account.id
    assert session.username == username_from_phone(phone)
    assert accounts.is_authenticated()

def test_register_persists_account_with_password(accounts, store):
    accounts.register("555-0101", "secret", "Acme", AccountType.ORGANIZATION)

    stored = store.get(USERS_KEY)
    assert len(stored) == 1
    assert stored[0]["password"] == "secret"
    assert stored[0]["type"] == "organization"
    assert "password" not in store.get(SESSION_KEY)

def test_duplicate_phone_rejected(accounts, store):
    accounts.register("555-0101", "secret", "Jane")
    before = store.get(USERS_KEY)

    with pytest.raises(DuplicatePhoneError):
        accounts.register("555-0101", "other", "Someone Else")

    assert store.get(USERS_KEY) == before
    assert len(accounts.list_accounts()) == 1

def test_distinct_phones_get_distinct_ids(accounts):
    with patch("cardcraft.utils.ids.time.time", return_value=1700000000.0):
        first = accounts.register("555-0001", "a", "A")
        second = accounts.register("555-0002", "b", "B")

    assert first.id != second.id
    assert [a.phone for a in accounts.list_accounts()] == ["555-0001", "555-0002"]

def test_login_exact_match(accounts):
    account = accounts.register("555-0101", "secret", "Jane")
    accounts.logout()

    logged_in = accounts.login("555-0101", "secret")
    assert logged_in.id == account.id
    assert accounts.current_session().id == account.id

@pytest.mark.parametrize("phone,password", [
    ("555-0101", "wrong"),
    ("555-0102", "secret"),
    ("5550101", "secret"),
    ("555-0101", "Secret"),
])
def test_login_mismatch_fails(accounts, phone, password):
    accounts.register("555-0101", "secret", "Jane")
    accounts.logout()

    with pytest.raises(InvalidCredentialsError):
        accounts.login(phone, password)
    assert accounts.current_session() is None

def test_logout_is_idempotent(accounts):
    accounts.register("555-0101", "secret", "Jane")
    accounts.logout()
    accounts.logout()
    assert accounts.current_session() is None
    assert not accounts.is_authenticated()

def test_session_rehydrates_from_store(store, accounts):
    account = accounts.register("555-0101", "secret", "Jane")

    restarted = AccountService(store)
    assert restarted.current_session().id == account.id

def test_stale_session_survives_account_removal(store, accounts):
    """The session is not revalidated against the registered accounts."""
    accounts.register("555-0101", "secret", "Jane")
    store.set(USERS_KEY, [])

    assert accounts.current_session() is not None

def test_find_by_username(accounts):
    account = accounts.register("+1 555 0101", "secret", "Jane")
    assert accounts.find_by_username("15550101").id == account.id
    assert accounts.find_by_username("doesnotexist") is None

def test_new_timestamp_id_skips_existing():
    with patch("cardcraft.utils.ids.time.time", return_value=1.0):
        assert new_timestamp_id(set()) == "1000"
        assert new_timestamp_id({"1000", "1001"}) == "1002"
