# =============================================================================
# imagegate/core/errors.py - OpenAI-style error envelope
# =============================================================================
# Every failure leaves the gateway as
#   {"error": {"message", "type", "param", "code"}}
# with the HTTP status carried by the exception class.
# =============================================================================

from fastapi.responses import JSONResponse


class APIError(Exception):
    status_code: int = 500
    error_type: str = "server_error"

    def __init__(
        self,
        message: str,
        *,
        param: str | None = None,
        code: str | None = None,
        error_type: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.param = param
        self.code = code
        if error_type is not None:
            self.error_type = error_type

    def to_dict(self) -> dict:
        return {
            "error": {
                "message": self.message,
                "type": self.error_type,
                "param": self.param,
                "code": self.code,
            }
        }

    def to_response(self, headers: dict[str, str] | None = None) -> JSONResponse:
        return JSONResponse(status_code=self.status_code, content=self.to_dict(), headers=headers)


class InvalidRequestError(APIError):
    status_code = 400
    error_type = "invalid_request_error"


class AuthenticationError(APIError):
    status_code = 401
    error_type = "invalid_request_error"


class NotFoundError(APIError):
    status_code = 404
    error_type = "invalid_request_error"

    def __init__(self, message: str = "Not Found") -> None:
        super().__init__(message, code="not_found")


class NotImplementedAPIError(APIError):
    status_code = 501
    error_type = "not_implemented_error"

    def __init__(self, message: str) -> None:
        super().__init__(message, code="not_implemented")


class ProviderError(APIError):
    """Any failure talking to the inference provider; fails the whole batch."""

    status_code = 500
    error_type = "server_error"

    def __init__(self, message: str) -> None:
        super().__init__(message, code="ai_service_error")


class InternalError(APIError):
    status_code = 500
    error_type = "server_error"

    def __init__(self, message: str) -> None:
        super().__init__(message, code="internal_error")
