"""Exception classes for form-validate operations.

Validation failures are never raised: they are returned as error trees.
The classes here cover the situations where a validation call cannot
produce a trustworthy result at all.
"""


class FormValidateError(Exception):
    """Base exception for form-validate operations."""

    error_prefix: str = "Operation failed"

    def __init__(self, message: str, target: str | None = None) -> None:
        """Initialize error with message and optional target.

        Args:
            message: Error message describing the failure.
            target: Optional name of the rule, node or file that failed.

        """
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.target:
            return f"{self.error_prefix} for '{self.target}': {self.message}"
        return f"{self.error_prefix}: {self.message}"


class SchemaConfigurationError(FormValidateError):
    """Raised when a schema is broken, e.g. it references an unknown rule."""

    error_prefix = "Invalid schema"


class RuleEvaluationError(FormValidateError):
    """Raised when a rule evaluator fails instead of returning a result."""

    error_prefix = "Rule evaluation failed"

    def __init__(
        self, message: str, rule: str, target: str | None = None
    ) -> None:
        """Initialize evaluation error.

        Args:
            message: Description of the underlying failure.
            rule: Name of the rule whose evaluator failed.
            target: Title of the node being validated.

        """
        super().__init__(message, target)
        self.rule = rule

    def __str__(self) -> str:
        """Return formatted error message including the rule name."""
        base = super().__str__()
        return f"{base} (rule '{self.rule}')"


class SettingsError(FormValidateError):
    """Raised when validator settings cannot be loaded."""

    error_prefix = "Invalid settings"
