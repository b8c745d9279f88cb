# core/exceptions.py

"""
ERP SERVICE ERRORS

Centralized domain errors shared by the ledger and inventory engines.

Rules:
- Services raise these (never bare Exception) with a human-readable message.
- The API layer maps them to HTTP responses (see core.api.exception_handler).
- Each error carries a stable machine code for clients.
"""


class ERPError(Exception):
    """Base exception for all ERP service failures."""

    code = "erp_error"

    def __init__(self, message: str = "", **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self):
        return self.message or self.__class__.__name__


class ValidationError(ERPError):
    """Raised for malformed or missing required input."""

    code = "validation_error"


class UnbalancedEntryError(ValidationError):
    """Raised when journal entry debits and credits differ beyond tolerance."""

    code = "unbalanced_entry"


class DuplicateAccountCode(ValidationError):
    """Raised when an active account already uses the code within a company."""

    code = "duplicate_account_code"


class InvalidStateTransition(ERPError):
    """Raised when a lifecycle transition is not allowed from the current status."""

    code = "invalid_state_transition"


class InsufficientStockError(ERPError):
    """Raised when a transfer asks for more than the source warehouse has available."""

    code = "insufficient_stock"


class NotFoundError(ERPError):
    """Raised when a referenced entity does not exist."""

    code = "not_found"


class RemoteStoreError(ERPError):
    """Raised when the underlying database call fails. Never retried."""

    code = "store_error"
