"""
dealbook.errors

Service error taxonomy.

Responsibilities:
- Define one exception type per failure class, each carrying its HTTP status.
- Keep public messages separate from internal causes (causes are chained, not rendered).

Every `ServiceError` is converted into exactly one `{"error": message}` response by the
handler registered in `dealbook.api.app.create_app`.
"""

from __future__ import annotations

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)


class ServiceError(Exception):
    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


# Authentication (all 401)


class MissingHeader(ServiceError):
    status_code = HTTP_401_UNAUTHORIZED
    default_message = "Authorization header is missing."


class MalformedCredential(ServiceError):
    status_code = HTTP_401_UNAUTHORIZED
    default_message = "Token is missing from the Authorization header."


class InvalidCredential(ServiceError):
    status_code = HTTP_401_UNAUTHORIZED
    default_message = "Invalid or expired token."


class MissingOwner(ServiceError):
    status_code = HTTP_401_UNAUTHORIZED
    default_message = "User ID not found on authenticated request."


# Request / resource


class ValidationError(ServiceError):
    status_code = HTTP_400_BAD_REQUEST
    default_message = "Invalid request."


class OwnershipMismatch(ServiceError):
    status_code = HTTP_403_FORBIDDEN
    default_message = "You do not have access to this resource."


class NotFound(ServiceError):
    status_code = HTTP_404_NOT_FOUND
    default_message = "Not found."


# Downstream / environment (all 500)


class GatewayFailure(ServiceError):
    status_code = HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Upstream service failure."


class ConfigurationError(ServiceError):
    status_code = HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Service is not configured."


# --- Module Notes -----------------------------------------------------------
# `ValidationError` here is the service's 400 class; it is unrelated to pydantic's.
