from __future__ import annotations


class NylasError(RuntimeError):
    """Base class for every error raised by nylas_mail."""


class MalformedResponseError(NylasError):
    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class UnsuccessfulTokenExchangeError(NylasError):
    def __init__(self, description: str, code: int | str | None = None) -> None:
        super().__init__(description)
        self.description = description
        self.code = code


class TransportError(NylasError):
    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class InvalidGrantTypeError(NylasError):
    pass


class ApiError(NylasError):
    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        error_type: str | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(f"{status_code} {message}")
        self.status_code = status_code
        self.error_type = error_type
        self.request_id = request_id
