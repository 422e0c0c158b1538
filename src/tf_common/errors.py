"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/User
  2xxx: Task
  3xxx: Account
  4xxx: Expense
  9xxx: System

Records outside the caller's ownership scope raise the same *NotFoundError
as missing records, so a caller can never probe for another user's ids.
"""

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        self.headers = headers
        super().__init__(message)


# --- 1xxx: Auth/User ---

class EmailExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "An account with this email already exists", 400)


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Invalid email or password", 401, _BEARER_CHALLENGE)


class NotAuthenticatedError(AppError):
    def __init__(self) -> None:
        super().__init__(
            1003, "You are not logged in. Please log in to get access", 401, _BEARER_CHALLENGE
        )


class InvalidTokenError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Invalid or expired token", 401, _BEARER_CHALLENGE)


class UserNoLongerExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(
            1005, "The user belonging to this token no longer exists", 401, _BEARER_CHALLENGE
        )


# --- 2xxx: Task ---

class TaskNotFoundError(AppError):
    def __init__(self, task_id: str) -> None:
        super().__init__(2001, f"Task not found: {task_id}", 404)


# --- 3xxx: Account ---

class AccountNotFoundError(AppError):
    def __init__(self, account_id: str) -> None:
        super().__init__(3001, f"Account not found: {account_id}", 404)


# --- 4xxx: Expense ---

class ExpenseNotFoundError(AppError):
    def __init__(self, expense_id: str) -> None:
        super().__init__(4001, f"Expense not found: {expense_id}", 404)


class ReceiptNotFoundError(AppError):
    def __init__(self, expense_id: str) -> None:
        super().__init__(4002, f"Expense {expense_id} has no receipt", 404)


class ReceiptTooLargeError(AppError):
    def __init__(self, max_bytes: int) -> None:
        super().__init__(4003, f"Receipt exceeds the {max_bytes} byte limit", 400)


class UnsupportedReceiptTypeError(AppError):
    def __init__(self, content_type: str | None) -> None:
        super().__init__(
            4004,
            f"Unsupported receipt type: {content_type}. "
            "Only JPEG, PNG, GIF, WebP images and PDF are accepted",
            400,
        )


# --- 9xxx: System ---

class RateLimitError(AppError):
    def __init__(self, retry_after: int) -> None:
        super().__init__(
            9001,
            f"Too many requests, try again in {retry_after} seconds",
            429,
            {"Retry-After": str(retry_after)},
        )


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


class ValidationFailedError(AppError):
    def __init__(self, errors: list[dict[str, str]]) -> None:
        super().__init__(9003, "Invalid input data", 400)
        self.errors = errors
