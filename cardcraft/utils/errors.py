"""
Error types raised by the CardCraft stores.
"""


class CardCraftError(Exception):
    """Base class for CardCraft errors."""


class DuplicatePhoneError(CardCraftError):
    """Registration rejected because the phone number is already registered."""

    def __init__(self, phone: str):
        super().__init__(f"An account with phone {phone} already exists")
        self.phone = phone


class InvalidCredentialsError(CardCraftError):
    """Login rejected because no account matches the phone and password."""

    def __init__(self):
        super().__init__("Invalid phone number or password")


class StorageError(CardCraftError):
    """The persisted key/value document could not be read or written."""


class NotLoggedInError(CardCraftError):
    """An operation on the current account was attempted without a session."""

    def __init__(self):
        super().__init__("Not logged in")
