# services/errors.py
"""
Error taxonomy for the ledger services.

- ValidationError: malformed or missing input; raised before any write.
- NotFoundError: record missing or owned by someone else.
- StoreError: the database failed (connection, permission, constraint).
- AuthError: sign-up / sign-in failure, typed by code.
"""


class LedgerError(Exception):
     """Base class for service-level errors."""


class ValidationError(LedgerError):
     """Input rejected before anything was written."""

     def __init__(self, message: str, field: str | None = None):
          super().__init__(message)
          self.message = message
          self.field = field


class NotFoundError(LedgerError):
     """Record does not exist for this owner."""


class StoreError(LedgerError):
     """The ledger store could not complete an operation."""


class DuplicateRecordError(StoreError):
     """A uniqueness constraint rejected the write."""


# User-facing messages per auth failure code
AUTH_ERROR_MESSAGES = {
     "email-in-use": "Email is already registered",
     "invalid-email": "Invalid email address",
     "operation-not-allowed": "Email/password accounts are not enabled. Please contact support.",
     "weak-password": "Password is too weak. Please choose a stronger password.",
     "invalid-credential": "Invalid email or password",
}
GENERIC_AUTH_MESSAGE = "Error creating account. Please try again."


class AuthError(LedgerError):
     """Authentication failure with a machine-readable code."""

     def __init__(self, code: str):
          self.code = code
          self.message = AUTH_ERROR_MESSAGES.get(code, GENERIC_AUTH_MESSAGE)
          super().__init__(self.message)
