"""Parameter models for a single generation run."""

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import ConfigError


class _Options(BaseModel):
    """Frozen model that reports validation failures as ConfigError."""

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)

    def __init__(self, **data):
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


class GeneratorConfig(_Options):
    """Configuration for point sampling and tessellation."""

    num_points: int = Field(default=100, ge=0, description="Number of points to sample")
    num_lloyd_iterations: int = Field(default=2, ge=0, description="Lloyd relaxation passes")
    box_size: float = Field(default=500.0, gt=0, description="Side length of the bounding square")


class IslandGeneratorSettings(_Options):
    """Controls for the island height flood fill."""

    seed_height: float = Field(default=1.0, ge=0, le=1, description="Height of the start cell")
    decay: float = Field(default=0.95, gt=0, lt=1, description="Per-hop height multiplier")
    jitter: float = Field(default=0.2, ge=0, le=1, description="Randomization of each contribution")
