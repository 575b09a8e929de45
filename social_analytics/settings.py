"""
Engine settings using pydantic-settings for type-safe configuration.

Layout physics constants and analysis parameters are centralized here with
proper typing, validation and defaults.
Values can be overridden through SOCIAL_ANALYTICS_* environment variables
or a .env file. Settings are loaded once and cached.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LayoutSettings(BaseModel):
    """Force-directed layout constants.

    Canvas dimensions are in visualization units (pixels for the default
    800x600 canvas).
    """

    model_config = ConfigDict(frozen=True)

    # === Canvas ===
    width: float = Field(default=800.0, gt=0, description="Canvas width")
    height: float = Field(default=600.0, gt=0, description="Canvas height")
    margin: float = Field(default=40.0, ge=0, description="Inset kept clear on every canvas edge")
    initial_spread: float = Field(
        default=100.0,
        ge=0,
        description="Half-width of the square around the center where nodes start",
    )

    # === Forces ===
    repulsion: float = Field(default=2000.0, ge=0, description="K_rep, numerator of the inverse-square repulsion")
    spring: float = Field(default=0.015, ge=0, description="K_spring, edge attraction per unit distance")
    gravity: float = Field(default=0.002, ge=0, description="K_gravity, pull toward the canvas center")

    # === Annealing ===
    hot_damping: float = Field(default=0.85, description="Velocity damping during the hot phase")
    cool_damping: float = Field(default=0.95, description="Velocity damping after the hot phase")
    hot_steps: int = Field(default=300, ge=0, description="Number of steps run with hot damping")

    # Seed for initial placement; None means a fresh random layout every load
    random_seed: int | None = Field(default=None, description="Seed for initial node placement")

    @field_validator("hot_damping", "cool_damping", mode="after")
    @classmethod
    def validate_damping(cls, v: float) -> float:
        """Damping must shrink velocity each step."""
        if not 0.0 < v < 1.0:
            raise ValueError(f"Damping must be in the open interval (0, 1), got {v}")
        return v

    @model_validator(mode="after")
    def validate_margin(self) -> LayoutSettings:
        """The inset rectangle must have room inside the canvas."""
        if 2 * self.margin > min(self.width, self.height):
            raise ValueError(f"Margin {self.margin} leaves no room on a {self.width}x{self.height} canvas")
        return self

    @property
    def center(self) -> tuple[float, float]:
        return self.width / 2, self.height / 2


class AnalysisSettings(BaseModel):
    """Centrality and community detection parameters."""

    model_config = ConfigDict(frozen=True)

    label_iterations: int = Field(default=5, ge=0, description="Synchronous label propagation rounds")
    top_n: int = Field(default=5, ge=1, description="Length of the ranked centrality lists")


class Settings(BaseSettings):
    """
    Engine settings loaded from environment variables.

    Nested values use a double underscore, e.g.
    SOCIAL_ANALYTICS_LAYOUT__REPULSION=1500.
    """

    model_config = SettingsConfigDict(
        env_prefix="SOCIAL_ANALYTICS_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra env vars not defined here
        case_sensitive=False,
    )

    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once and cached for the lifetime of the process.
    Call get_settings.cache_clear() after changing the environment.
    """
    return Settings()
