"""Performance 도메인 예외 계층입니다. 라우터 경계에서 응답 envelope으로 변환됩니다."""


class EvaluationError(Exception):
    """Base exception for performance evaluation rule violations."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(EvaluationError):
    """Raised when input is missing or outside its allowed range."""

    status_code = 400


class NotFoundError(EvaluationError):
    """Raised when an evaluation or user does not exist."""

    status_code = 404


class ConflictError(EvaluationError):
    """Raised when a write collides with a finalized record or an existing key."""

    status_code = 409


class InvalidStateError(EvaluationError):
    """Raised when the lifecycle state does not allow the operation."""

    status_code = 409
