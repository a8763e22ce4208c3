"""
Exception classes for hexmaze with helpful error messages and user guidance.

Only two kinds of failure exist when making a maze: the user asked for a grid
outside the supported range, or the machine could not provide the storage the
validated dimensions require. Both are reported through the classes below with
structured context so the CLI can print something actionable.
"""

from __future__ import annotations

from typing import Any

MIN_DIMENSION = 2
MAX_DIMENSION = 1000


class MazeError(Exception):
    """
    Base exception for maze generation errors with helpful context and suggestions.

    This exception class provides structured error information including:
    - Clear error description
    - Component context information
    - Suggested actions for resolution
    - Optional diagnostic data
    """

    def __init__(
        self,
        message: str,
        component: str | None = None,
        suggested_action: str | None = None,
        error_code: str | None = None,
        diagnostic_data: dict[str, Any] | None = None,
    ):
        self.component = component or "hexmaze"
        self.suggested_action = suggested_action
        self.error_code = error_code
        self.diagnostic_data = diagnostic_data or {}

        full_message = f"[{self.component}] {message}"

        if self.suggested_action:
            full_message += f"\nSuggestion: {self.suggested_action}"

        if self.error_code:
            full_message += f"\nError Code: {self.error_code}"

        if self.diagnostic_data:
            full_message += "\nDiagnostic Information:"
            for key, value in self.diagnostic_data.items():
                full_message += f"\n   - {key}: {value}"

        super().__init__(full_message)


class ConfigurationError(MazeError):
    """Exception raised when a maze parameter is invalid."""

    def __init__(
        self,
        parameter_name: str,
        provided_value: Any,
        expected_type: type | None = None,
        valid_range: tuple | None = None,
        component: str | None = None,
    ):
        diagnostic_data = {
            "parameter": parameter_name,
            "provided_value": str(provided_value),
            "provided_type": type(provided_value).__name__,
        }

        if expected_type:
            diagnostic_data["expected_type"] = expected_type.__name__

        if valid_range:
            diagnostic_data["valid_range"] = f"[{valid_range[0]}, {valid_range[1]}]"

        suggested_action = _generate_configuration_suggestions(
            parameter_name, provided_value, expected_type, valid_range
        )

        self.parameter_name = parameter_name
        self.provided_value = provided_value

        super().__init__(
            message=f"Invalid configuration for parameter '{parameter_name}'",
            component=component,
            suggested_action=suggested_action,
            error_code="INVALID_CONFIGURATION",
            diagnostic_data=diagnostic_data,
        )


class ResourceExhaustedError(MazeError):
    """Exception raised when storage for the grid, walls or forest cannot be allocated."""

    def __init__(self, resource: str, requested: int, component: str | None = None):
        self.resource = resource
        self.requested = requested

        super().__init__(
            message=f"Could not allocate storage for {resource}",
            component=component,
            suggested_action="Request a smaller maze; memory needs grow with columns * rows",
            error_code="RESOURCE_EXHAUSTED",
            diagnostic_data={"resource": resource, "requested_entries": requested},
        )


class MazeStructureError(MazeError):
    """Exception raised when a generated maze is not a spanning tree of its grid."""

    def __init__(self, verification: dict[str, Any], component: str | None = None):
        self.verification = verification

        failed = [key for key in ("is_connected", "is_no_loops", "is_symmetric") if not verification.get(key, True)]

        super().__init__(
            message=f"Generated maze is not perfect (failed: {', '.join(failed) or 'unknown'})",
            component=component,
            error_code="IMPERFECT_MAZE",
            diagnostic_data=verification,
        )


def _generate_configuration_suggestions(
    parameter_name: str,
    provided_value: Any,
    expected_type: type | None,
    valid_range: tuple | None,
) -> str:
    """Generate specific suggestions for configuration errors."""

    suggestions = []

    if expected_type and not isinstance(provided_value, expected_type):
        suggestions.append(f"Convert {parameter_name} to {expected_type.__name__}")

    if valid_range and isinstance(provided_value, (int, float)):
        if provided_value < valid_range[0]:
            suggestions.append(f"Increase {parameter_name} to at least {valid_range[0]}")
        elif provided_value > valid_range[1]:
            suggestions.append(f"Decrease {parameter_name} to at most {valid_range[1]}")

    return " | ".join(suggestions) if suggestions else f"Check {parameter_name} value and try again"


# Convenience functions for common error scenarios


def validate_parameter_value(
    value: Any,
    parameter_name: str,
    expected_type: type | None = None,
    valid_range: tuple | None = None,
    component: str | None = None,
):
    """Validate parameter value and type."""
    # bool is an int subclass but never a valid dimension
    if expected_type and (not isinstance(value, expected_type) or isinstance(value, bool)):
        raise ConfigurationError(
            parameter_name=parameter_name,
            provided_value=value,
            expected_type=expected_type,
            component=component,
        )

    if valid_range and isinstance(value, (int, float)):
        if not (valid_range[0] <= value <= valid_range[1]):
            raise ConfigurationError(
                parameter_name=parameter_name,
                provided_value=value,
                valid_range=valid_range,
                component=component,
            )


def validate_dimensions(columns: Any, rows: Any, component: str | None = None):
    """Check that both grid dimensions are integers in the supported range."""
    for name, value in (("columns", columns), ("rows", rows)):
        validate_parameter_value(
            value,
            name,
            expected_type=int,
            valid_range=(MIN_DIMENSION, MAX_DIMENSION),
            component=component,
        )
