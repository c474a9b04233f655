"""Profiler configuration model."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TOP_N_CAPACITY = 3
DEFAULT_DECIMAL_DIGITS = 4


class ProfilerConfig(BaseModel):
    """Tunables consumed by the profiling accumulators and renderers."""

    top_n_capacity: int = Field(
        default=DEFAULT_TOP_N_CAPACITY,
        ge=1,
        description="Number of most frequent values kept per column",
    )
    decimal_digits: int = Field(
        default=DEFAULT_DECIMAL_DIGITS,
        ge=0,
        description="Decimal digits shown when rendering percentages and floats",
    )

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
        json_schema_extra={"example": {"top_n_capacity": 10, "decimal_digits": 2}},
    )


def load_config_from_yaml(yaml_path: str | Path) -> ProfilerConfig:
    """Load and validate profiler configuration from a YAML file.

    Args:
        yaml_path: Path to the YAML configuration file

    Returns:
        Validated ProfilerConfig; an empty file yields the defaults

    Raises:
        ValidationError: If the configuration is invalid
        FileNotFoundError: If file doesn't exist

    """
    import yaml

    yaml_file = Path(yaml_path)
    if not yaml_file.exists():
        msg = f"Profiler config file not found: {yaml_file}"
        raise FileNotFoundError(msg)

    with yaml_file.open(encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        msg = f"Profiler config must be a mapping, got {type(data).__name__}"
        raise ValueError(msg)

    return ProfilerConfig(**data)


__all__ = [
    "DEFAULT_DECIMAL_DIGITS",
    "DEFAULT_TOP_N_CAPACITY",
    "ProfilerConfig",
    "load_config_from_yaml",
]
