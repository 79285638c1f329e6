"""Configuration errors and their readable rendering for the CLI."""

from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence

from pydantic import ValidationError

SCALAR_TYPE_ERRORS = {
    "string_type": "string",
    "int_type": "integer",
    "int_parsing": "integer",
    "float_type": "number",
    "float_parsing": "number",
    "bool_type": "boolean",
    "bool_parsing": "boolean",
}

VALIDATION_SUGGESTIONS = (
    "Review config.example.yaml for correct format",
    "Verify field types match the expected schema",
)


def format_field_path(loc: Sequence[Any]) -> str:
    """Render a pydantic error location as ``section -> field``."""
    return " -> ".join(str(part) for part in loc) or "(root)"


def describe_validation_error(error: Mapping[str, Any]) -> str:
    """Turn one pydantic error entry into a single readable line."""
    field_path = format_field_path(error.get("loc", ()))
    error_type = error.get("type", "")

    if error_type == "missing":
        return f"Missing required field: {field_path}"
    if error_type in SCALAR_TYPE_ERRORS:
        return (
            f"Invalid type for '{field_path}': expected {SCALAR_TYPE_ERRORS[error_type]}, "
            f"got {error.get('input')!r}"
        )
    if "enum" in error_type:
        return f"Invalid value for '{field_path}': {error['msg']}"
    return f"{field_path}: {error['msg']}"


class ConfigurationError(Exception):
    """Raised when configuration cannot be loaded or validated.

    The string form names the offending file when known, then lists every
    validation error followed by suggestions, so the CLI can print it as-is.
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        suggestions: Optional[List[str]] = None,
        config_path: Optional[Path] = None,
    ):
        self.message = message
        self.errors = list(errors or [])
        self.suggestions = list(suggestions or [])
        self.config_path = config_path
        super().__init__(self._format_message())

    @classmethod
    def from_validation_error(
        cls, error: ValidationError, config_path: Optional[Path] = None
    ) -> "ConfigurationError":
        """Build an error with one numbered line per pydantic failure."""
        return cls(
            "Configuration validation failed",
            errors=[describe_validation_error(entry) for entry in error.errors()],
            suggestions=list(VALIDATION_SUGGESTIONS),
            config_path=config_path,
        )

    def _format_message(self) -> str:
        headline = self.message
        if self.config_path is not None:
            headline = f"{headline} ({self.config_path})"
        parts = [headline]

        if self.errors:
            parts.append("\nValidation Errors:")
            parts.extend(f"  {i}. {error}" for i, error in enumerate(self.errors, 1))

        if self.suggestions:
            parts.append("\nSuggestions:")
            parts.extend(f"  - {suggestion}" for suggestion in self.suggestions)

        return "\n".join(parts)
