"""
Validation result models.

Returned from every Validator check so the caller can override the default
field name or message.
"""

from pydantic import BaseModel, ConfigDict


class ValidationResult(BaseModel):
    """
    Outcome of a single validation check.

    Failed results are owned by the Validator that recorded them; with_field
    and with_message update them in place. The shared VALIDATION_OK result is
    frozen and returned unchanged by both.
    """

    ok: bool
    field: str = ""
    message: str = ""

    def with_field(self, field: str) -> "ValidationResult":
        """Change the field name associated with the result."""
        if not self.ok:
            self.field = field
        return self

    def with_message(self, message: str) -> "ValidationResult":
        """
        Change the error message associated with the result. message should
        typically be a user-readable sentence, such as "username is required."
        """
        if not self.ok:
            self.message = message
        return self


class _OkResult(ValidationResult):
    """Shared result of a passing check. Assigning to its fields raises."""

    model_config = ConfigDict(frozen=True)


VALIDATION_OK: ValidationResult = _OkResult(ok=True)
