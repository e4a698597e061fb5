"""Fault Taxonomy: typed, categorized exceptions for every registry failure mode.

Invariants:
    - Every fault has a kind (FaultKind), a code (str), a wire status and a severity
    - The kind set is closed: one subclass per kind, no ad-hoc status codes
    - to_response() never includes the wrapped cause or a Python type name
    - A fault raised by the Store keeps its kind all the way to the wire

Design Decisions:
    - Single hierarchy with RegistryError base: the fault translator catches one type
      (ADR: uniform error shape)
    - Cause kept on the fault and chained with `raise ... from`: operators get the
      traceback in logs, clients only ever see kind + message
"""

from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class FaultKind(str, Enum):
    """Closed set of fault kinds. Values are the wire-visible kind names."""
    BAD_REQUEST = "BadRequest"
    UNAUTHORIZED = "Unauthorized"
    NOT_FOUND = "NotFound"
    CONFLICT = "Conflict"
    VALIDATION = "Validation"
    EXTERNAL_SERVICE = "ExternalService"
    DATA_ACCESS = "DataAccess"
    SERVICE = "Service"


FAULT_STATUS: dict[FaultKind, int] = {
    FaultKind.BAD_REQUEST: 400,
    FaultKind.UNAUTHORIZED: 401,
    FaultKind.NOT_FOUND: 404,
    FaultKind.CONFLICT: 409,
    FaultKind.VALIDATION: 422,
    FaultKind.EXTERNAL_SERVICE: 502,
    FaultKind.DATA_ACCESS: 500,
    FaultKind.SERVICE: 500,
}


class RegistryError(Exception):
    """Base exception for all registry faults."""

    def __init__(
        self,
        message: str,
        code: str,
        kind: FaultKind,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.kind = kind
        self.severity = severity
        self.cause = cause
        self.http_status = FAULT_STATUS[kind]
        self.timestamp = datetime.now(timezone.utc)

    def to_response(self, correlation_id: str | None = None) -> dict:
        """Convert to the standardized REST error envelope."""
        return {
            "error": {
                "code": self.code,
                "kind": self.kind.value,
                "message": self.message,
                "status": self.http_status,
                "severity": self.severity.value,
                "timestamp": self.timestamp.isoformat(),
                "correlationId": correlation_id,
            }
        }


# ─── Client Faults (400-level) ──────────────────────────────────

class BadRequestError(RegistryError):
    """Malformed or inconsistent client input (e.g. path/body id mismatch)."""
    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(
            message, "BAD_REQUEST", FaultKind.BAD_REQUEST,
            ErrorSeverity.WARNING, cause,
        )


class UnauthorizedError(RegistryError):
    """Caller is not authenticated."""
    def __init__(self, message: str = "Authentication required", cause: BaseException | None = None):
        super().__init__(
            message, "UNAUTHORIZED", FaultKind.UNAUTHORIZED,
            ErrorSeverity.WARNING, cause,
        )


class ResourceNotFoundError(RegistryError):
    """Referenced aggregate or member does not exist."""
    def __init__(self, resource_type: str, resource_id: object, message: str | None = None):
        super().__init__(
            message or f"{resource_type} with ID {resource_id} not found.",
            "RESOURCE_NOT_FOUND", FaultKind.NOT_FOUND,
            ErrorSeverity.WARNING,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(RegistryError):
    """Concurrent modification detected."""
    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", FaultKind.CONFLICT,
            ErrorSeverity.ERROR, cause,
        )


class InputValidationError(RegistryError):
    """Input is well-formed but fails semantic validation."""
    def __init__(self, message: str, field: str | None = None, details: list[dict] | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", FaultKind.VALIDATION,
            ErrorSeverity.WARNING,
        )
        self.field = field
        self.details = details or []

    def to_response(self, correlation_id: str | None = None) -> dict:
        response = super().to_response(correlation_id)
        if self.details:
            response["error"]["details"] = self.details
        return response


# ─── Infrastructure Faults (500-level) ──────────────────────────

class ExternalServiceError(RegistryError):
    """A downstream dependency failed."""
    def __init__(self, service_name: str, message: str, cause: BaseException | None = None):
        super().__init__(
            f"External service '{service_name}' failed: {message}",
            "EXTERNAL_SERVICE_ERROR", FaultKind.EXTERNAL_SERVICE,
            ErrorSeverity.CRITICAL, cause,
        )
        self.service_name = service_name


class DataAccessError(RegistryError):
    """Unclassified persistence failure."""
    def __init__(self, message: str, operation: str, cause: BaseException | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATA_ACCESS_ERROR", FaultKind.DATA_ACCESS,
            ErrorSeverity.CRITICAL, cause,
        )
        self.operation = operation


class ServiceError(RegistryError):
    """Unclassified orchestration failure."""
    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(
            message, "SERVICE_ERROR", FaultKind.SERVICE,
            ErrorSeverity.CRITICAL, cause,
        )
