# ============================================================================
# EXCEPTIONS
# ============================================================================
# STATUS: Shared - used by services, processor and triggers
# PURPOSE: Custom exception hierarchy separating contract violations from business failures
# EXPORTS: ContractViolationError, BusinessLogicError, ValidationError,
#          MalformedMessageError, UnknownActionError, StoreUnavailableError,
#          ResourceNotFoundError
# DEPENDENCIES: None (standard library only)
# ============================================================================

"""
Custom Exception Hierarchy

Distinguishes between:
1. Contract Violations (programming bugs that need fixing)
2. Business Logic Failures (expected runtime issues)

How each failure is surfaced:
    ValidationError        -> HTTP 400 (it is a ValueError)
    ResourceNotFoundError  -> HTTP 404
    StoreUnavailableError  -> HTTP 500 / re-raised to the queue host for retry
    MalformedMessageError  -> logged, message discarded
    UnknownActionError     -> logged, message discarded
"""


class ContractViolationError(TypeError):
    """
    Raised when component contracts are violated (programming bugs).

    These should NEVER be caught and handled - they indicate bugs
    that need to be fixed in the code.

    Examples:
        - Repository receives a dict instead of an OrderRecord
        - Trigger built without the service it depends on
    """
    pass


class BusinessLogicError(Exception):
    """
    Base class for expected runtime business logic failures.
    """
    pass


class ValidationError(BusinessLogicError, ValueError):
    """
    Request body is empty, unparseable or missing required fields.

    Subclasses ValueError so the HTTP base trigger maps it to 400.

    Examples:
        - Empty body posted to /api/orders/enqueue
        - Customer payload without rowKey or fullName
        - Multipart upload with no file part
    """
    pass


class MalformedMessageError(BusinessLogicError):
    """
    Queue payload decoded but is not a recognizable order message.

    Never retried: redelivering the same bytes cannot fix them.
    """
    pass


class UnknownActionError(BusinessLogicError):
    """
    Order message carries an action other than CreateOrUpdate or Delete.
    """

    def __init__(self, action: str):
        super().__init__(f"Unknown action: {action}")
        self.action = action


class StoreUnavailableError(BusinessLogicError):
    """
    Storage transport failure (table, queue, blob or file share).

    Examples:
        - Storage account unreachable
        - Authentication failure
        - Request timeout after SDK retries
    """
    pass


class ResourceNotFoundError(BusinessLogicError):
    """
    Requested resource does not exist.

    Examples:
        - Order id not in the orders table
        - Contract file not in the share
    """
    pass
