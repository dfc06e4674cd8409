"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field


@dataclass
class ShadeConfig:
    """How region event counts map onto choropleth shade levels.

    Attributes:
        min_count: Count mapped to min_level
        max_count: Count mapped to max_level
        min_level: Shade level for min_count
        max_level: Shade level for max_count
    """
    min_count: int = 1
    max_count: int = 20
    min_level: int = 10
    max_level: int = 255


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        countries_path: GeoJSON file with country polygons
        cities_path: GeoJSON file with city points
        shade: Choropleth shading configuration
        log_level: Logging level name
    """
    countries_path: str = "data/countries.geo.json"
    cities_path: str = "data/city-data.json"
    shade: ShadeConfig = field(default_factory=ShadeConfig)
    log_level: str = "INFO"


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_coordinates(lat: float, lon: float, field_name: str) -> list[ValidationError]:
    """Validate latitude/longitude coordinates.

    Pure function.

    Args:
        lat: Latitude value
        lon: Longitude value
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not -90 <= lat <= 90:
        errors.append(ValidationError(
            field=field_name,
            message=f"Latitude {lat} out of range [-90, 90]",
        ))

    if not -180 <= lon <= 180:
        errors.append(ValidationError(
            field=field_name,
            message=f"Longitude {lon} out of range [-180, 180]",
        ))

    return errors


def validate_shade(shade: ShadeConfig, field_name: str = "shade") -> list[ValidationError]:
    """Validate choropleth shading ranges.

    Pure function.
    """
    errors = []

    if shade.min_count >= shade.max_count:
        errors.append(ValidationError(
            field=field_name,
            message=f"min_count ({shade.min_count}) >= max_count ({shade.max_count})",
        ))

    for name in ("min_level", "max_level"):
        level = getattr(shade, name)
        if not 0 <= level <= 255:
            errors.append(ValidationError(
                field=f"{field_name}.{name}",
                message=f"Shade level {level} out of range [0, 255]",
            ))

    return errors


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    for name in ("countries_path", "cities_path"):
        value = getattr(config, name)
        if not value or value.startswith("${"):
            errors.append(ValidationError(
                field=name,
                message="Path not set (empty or unresolved placeholder)",
                severity="warning",
            ))

    errors.extend(validate_shade(config.shade))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
