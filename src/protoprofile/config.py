"""Analysis configuration: classification thresholds and report options."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from protoprofile.errors import ConfigError
from protoprofile.layout import DefaultStringLayout, StringLayout
from protoprofile.resolver import DEFAULT_NAMESPACE_SEPARATOR

if TYPE_CHECKING:
    from protoprofile.profiling.types import AccessInfo
    from protoprofile.registry import TypeRegistry

# Both ratios were picked from a handful of macrobenchmarks. Most cold fields
# have a zero count, so results are not sensitive to the cold ratio.
DEFAULT_HOT_RATIO = 0.90
DEFAULT_COLD_RATIO = 0.005


class ThresholdConfig(BaseModel):
    """Thresholds used to bucket access statistics.

    Fixed for the duration of an analysis run.
    """

    hot_ratio: float = Field(
        default=DEFAULT_HOT_RATIO,
        gt=0.0,
        le=1.0,
        description="Read or write ratio at which a field is likely present",
    )
    cold_ratio: float = Field(
        default=DEFAULT_COLD_RATIO,
        ge=0.0,
        lt=1.0,
        description="Read and write ratio below which a field is rarely present",
    )
    unlikely_used_threshold: int = Field(
        default=0,
        ge=0,
        description="Read/write/other count at or below which a field is rarely used",
    )

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def cold_below_hot(self) -> ThresholdConfig:
        """Validate that a field cannot be both hot and cold."""
        if self.cold_ratio >= self.hot_ratio:
            msg = f"cold_ratio ({self.cold_ratio}) must be below hot_ratio ({self.hot_ratio})"
            raise ValueError(msg)
        return self

    @classmethod
    def from_access_info(cls, access_info: AccessInfo, **overrides: Any) -> ThresholdConfig:
        """Build the thresholds for a run from the profile header.

        Args:
        ----
            access_info: Loaded profile dataset
            **overrides: Ratio overrides; None values are ignored

        Raises:
        ------
            ConfigError: If the resulting thresholds are invalid

        """
        values: dict[str, Any] = {
            "unlikely_used_threshold": access_info.unlikely_used_threshold
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return cls(**values)
        except ValidationError as e:
            msg = f"Invalid thresholds: {e}"
            raise ConfigError(msg) from e


@dataclass
class AnalyzeOptions:
    """Options for a profile analysis run."""

    registry: TypeRegistry | None = None
    message_filter: str = ""
    print_all_fields: bool = False
    print_analysis: bool = False
    print_unused_threshold: bool = False
    namespace_separator: str = DEFAULT_NAMESPACE_SEPARATOR
    hot_ratio: float | None = None
    cold_ratio: float | None = None
    layout: StringLayout = field(default_factory=DefaultStringLayout)

    def validate(self) -> TypeRegistry:
        """Check required collaborators, returning the registry.

        Raises
        ------
            ConfigError: If the registry is missing or the separator is empty

        """
        if self.registry is None:
            msg = "registry must not be None"
            raise ConfigError(msg)
        if not self.namespace_separator:
            msg = "namespace_separator must not be empty"
            raise ConfigError(msg)
        return self.registry
