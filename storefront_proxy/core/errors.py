"""Error Hierarchy — typed, categorized exceptions for all storefront-proxy failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400-level) never reach the upstream; upstream errors are 500-level
    - to_response() produces the REST envelope used by every global handler
    - UpstreamEnrichmentError is absorbed by the aggregator and never reaches a handler
      (http_status is None: it has no response of its own)

Design Decisions:
    - Single hierarchy with StorefrontProxyError base: FastAPI global handler catches all
    - ErrorContext as dataclass: upstream URL/status travel with the error, not the log call
    - Upstream payload only surfaced when include_details=True (add-to-cart diagnostics)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    upstream_url: str | None = None
    upstream_status: int | None = None
    item_id: str | None = None
    debug_info: dict[str, Any] | None = None


class StorefrontProxyError(Exception):
    """Base exception for all storefront-proxy errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int | None = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "upstream_status": self.context.upstream_status,
                    "item_id": self.context.item_id,
                },
            }
        }


# ─── Startup Errors ─────────────────────────────────────────────

class ConfigurationError(StorefrontProxyError):
    """Required process configuration missing or invalid; the service must not start."""
    def __init__(self, missing: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Missing or invalid environment variables: {', '.join(missing)}. "
            "Please check your .env file.",
            "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.missing = missing


# ─── Request Errors (400-level) ─────────────────────────────────

class MissingParameterError(StorefrontProxyError):
    """Required request parameter missing or blank."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


# ─── Upstream Errors (500-level) ────────────────────────────────

class UpstreamError(StorefrontProxyError):
    """A single upstream call failed (transport error or non-2xx status)."""
    def __init__(
        self,
        message: str,
        url: str,
        status_code: int | None = None,
        payload: Any = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.upstream_url = url
        ctx.upstream_status = status_code
        super().__init__(
            message, "UPSTREAM_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, ctx, 502,
        )
        self.url = url
        self.status_code = status_code
        self.payload = payload


class UpstreamPrimaryError(StorefrontProxyError):
    """The primary fetch of a request failed. The whole request fails."""
    def __init__(
        self,
        message: str,
        cause: UpstreamError | None = None,
        include_details: bool = False,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        if cause is not None:
            ctx.upstream_url = cause.url
            ctx.upstream_status = cause.status_code
        super().__init__(
            message, "UPSTREAM_PRIMARY_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.cause = cause
        self.include_details = include_details

    def to_response(self) -> dict:
        response = super().to_response()
        if self.include_details and self.cause is not None:
            response["error"]["details"] = self.cause.payload
        return response


class UpstreamEnrichmentError(StorefrontProxyError):
    """One enrichment call failed. Recovered locally, surfaced as item data."""
    def __init__(
        self, message: str, item_id: str | None = None, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.item_id = item_id
        super().__init__(
            message, "UPSTREAM_ENRICHMENT_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.WARNING, ctx, None,
        )
