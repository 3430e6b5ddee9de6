"""Error taxonomy surfaced by meal plan operations."""


class MealPlanError(Exception):
    """Base class for classified meal plan failures."""

    error = "internal_error"
    status_code = 500
    retryable = False

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, object] | None = None,
        retryable: bool | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if retryable is not None:
            self.retryable = retryable

    def to_payload(self) -> dict[str, object]:
        """Return the error envelope sent to callers."""
        payload: dict[str, object] = {
            "error": self.error,
            "message": self.message,
            "retryable": self.retryable,
        }
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(MealPlanError):
    """Client input is malformed."""

    error = "validation_error"
    status_code = 400


class NotFoundError(MealPlanError):
    """A referenced user, plan, recipe or slot does not exist."""

    error = "not_found"
    status_code = 404


class ConflictError(MealPlanError):
    """The stored plan changed since it was read."""

    error = "conflict"
    status_code = 409
    retryable = True


class ServiceUnavailableError(MealPlanError):
    """The generative provider timed out or rate-limited the request."""

    error = "service_unavailable"
    status_code = 503
    retryable = True


class InternalError(MealPlanError):
    """Provider output was structurally invalid, or an unclassified failure."""

    error = "internal_error"
    status_code = 500

    def __init__(
        self,
        message: str,
        *,
        violations: list[str] | None = None,
        retryable: bool | None = None,
    ) -> None:
        self.violations = list(violations or [])
        details: dict[str, object] | None = (
            {"violations": self.violations} if self.violations else None
        )
        super().__init__(message, details=details, retryable=retryable)
