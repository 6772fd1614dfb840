"""
Account registration, login and the persisted session.
"""
import logging
import re
from typing import List, Optional

from ..storage.kv_store import KeyValueStore, SESSION_KEY, USERS_KEY
from ..storage.models import Account, AccountType, SessionUser
from ..utils.errors import DuplicatePhoneError, InvalidCredentialsError
from ..utils.ids import new_timestamp_id

logger = logging.getLogger(__name__)

def username_from_phone(phone: str) -> str:
    """Public username of an account: the digits of its phone number."""
    return re.sub(r"\D", "", phone)

class AccountService:
    """Credential store and session state over a KeyValueStore.

    Passwords are stored as given; there is no hashing and no session
    expiry.
    """

    def __init__(self, store: KeyValueStore):
        self._store = store

    def list_accounts(self) -> List[Account]:
        """All registered accounts in registration order."""
        return [Account.model_validate(raw) for raw in self._store.get(USERS_KEY) or []]

    def find_by_username(self, username: str) -> Optional[Account]:
        for account in self.list_accounts():
            if account.username == username:
                return account
        return None

    def register(
        self,
        phone: str,
        password: str,
        name: str,
        type: AccountType = AccountType.INDIVIDUAL
    ) -> Account:
        """Create an account and sign it in.

        Raises:
            DuplicatePhoneError: If the phone number is already registered
        """
        accounts = self.list_accounts()
        if any(account.phone == phone for account in accounts):
            logger.info("Registration rejected, phone already registered: %s", phone)
            raise DuplicatePhoneError(phone)

        account = Account(
            id=new_timestamp_id({a.id for a in accounts}),
            phone=phone,
            password=password,
            name=name,
            type=AccountType(type),
            username=username_from_phone(phone),
        )
        self._store.set(USERS_KEY, [a.to_storage() for a in accounts] + [account.to_storage()])
        logger.info("Registered account %s (%s)", account.id, account.username)

        self._start_session(account)
        return account

    def login(self, phone: str, password: str) -> Account:
        """Sign in with an exact phone and password match.

        Raises:
            InvalidCredentialsError: If no account matches
        """
        for account in self.list_accounts():
            if account.phone == phone and account.password == password:
                self._start_session(account)
                logger.info("Account %s logged in", account.id)
                return account
        logger.info("Login failed for phone %s", phone)
        raise InvalidCredentialsError()

    def logout(self):
        self._store.remove(SESSION_KEY)

    def current_session(self) -> Optional[SessionUser]:
        """The persisted session, not revalidated against the accounts."""
        raw = self._store.get(SESSION_KEY)
        if raw is None:
            return None
        return SessionUser.model_validate(raw)

    def is_authenticated(self) -> bool:
        return self.current_session() is not None

    def _start_session(self, account: Account):
        self._store.set(SESSION_KEY, account.to_session().to_storage())
