"""Compression parameters, search bounds and preset levels."""

from __future__ import annotations

import dataclasses
import math
import os
from typing import Mapping


def _check_unit_interval(name: str, value: float) -> None:
    if not 0.0 < value <= 1.0:
        raise ValueError(f"{name} must be in (0, 1], got {value!r}")


@dataclasses.dataclass(frozen=True, slots=True)
class CompressionParams:
    """JPEG quality and linear scale applied to every eligible image."""

    quality: float
    scale: float

    def __post_init__(self) -> None:
        _check_unit_interval("quality", self.quality)
        _check_unit_interval("scale", self.scale)

    def __str__(self) -> str:
        return f"quality={self.quality:.3f}, scale={self.scale:.2f}"


@dataclasses.dataclass(frozen=True, slots=True)
class SearchBounds:
    """Inclusive windows explored by the target-size search."""

    quality_min: float = 0.25
    quality_max: float = 0.9
    scale_min: float = 0.4
    scale_max: float = 1.0
    max_iterations: int = 6

    def __post_init__(self) -> None:
        for name in ("quality_min", "quality_max", "scale_min", "scale_max"):
            _check_unit_interval(name, getattr(self, name))
        if self.quality_min > self.quality_max:
            raise ValueError("quality_min must not exceed quality_max")
        if self.scale_min > self.scale_max:
            raise ValueError("scale_min must not exceed scale_max")
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be positive")

    @classmethod
    def clamped(
        cls,
        quality_min: float,
        quality_max: float,
        scale_min: float,
        scale_max: float,
        max_iterations: int,
    ) -> "SearchBounds":
        """Build bounds from loosely validated tuning values."""

        q_min = max(0.1, min(quality_min, 0.95))
        q_max = max(q_min, min(quality_max, 0.99))
        s_min = max(0.2, min(scale_min, 1.0))
        s_max = max(s_min, min(scale_max, 1.0))
        return cls(q_min, q_max, s_min, s_max, max(2, int(max_iterations)))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SearchBounds":
        """Read ``BATCHPDF_*`` overrides from the environment."""

        env = os.environ if environ is None else environ
        defaults = cls()
        values = {
            "quality_min": ("BATCHPDF_QUALITY_MIN", float),
            "quality_max": ("BATCHPDF_QUALITY_MAX", float),
            "scale_min": ("BATCHPDF_SCALE_MIN", float),
            "scale_max": ("BATCHPDF_SCALE_MAX", float),
            "max_iterations": ("BATCHPDF_MAX_ITERATIONS", int),
        }
        if not any(env.get(var) for var, _ in values.values()):
            return defaults
        resolved = {}
        for field_name, (var, convert) in values.items():
            raw = env.get(var)
            if raw is None or not raw.strip():
                resolved[field_name] = getattr(defaults, field_name)
                continue
            try:
                resolved[field_name] = convert(raw)
            except ValueError as exc:
                raise ValueError(f"Invalid value for {var}: {raw!r}") from exc
        return cls.clamped(**resolved)


@dataclasses.dataclass(frozen=True, slots=True)
class CompressionLevel:
    """Named preset pairing a JPEG quality with an image scale."""

    name: str
    display_name: str
    params: CompressionParams

    @property
    def quality(self) -> float:
        return self.params.quality

    @property
    def scale(self) -> float:
        return self.params.scale


VERY_LOW = CompressionLevel("very_low", "Tiny (Very Low Quality)", CompressionParams(0.25, 0.4))
LOW = CompressionLevel("low", "Smallest (Low Quality)", CompressionParams(0.35, 0.5))
LOW_MEDIUM = CompressionLevel("low_medium", "Small (Low-Medium Quality)", CompressionParams(0.5, 0.65))
MEDIUM = CompressionLevel("medium", "Balanced (Medium Quality)", CompressionParams(0.6, 0.75))
MEDIUM_HIGH = CompressionLevel("medium_high", "Balanced+ (Medium-High Quality)", CompressionParams(0.7, 0.9))
HIGH = CompressionLevel("high", "Largest (High Quality)", CompressionParams(0.8, 1.0))

LEVELS: tuple[CompressionLevel, ...] = (VERY_LOW, LOW, LOW_MEDIUM, MEDIUM, MEDIUM_HIGH, HIGH)
_BY_NAME = {level.name: level for level in LEVELS}

LOW_PRESET = LOW.params
SEED_PARAMS = LOW.params


def get_level(name: str | CompressionLevel) -> CompressionLevel:
    """Return the preset called ``name`` (``"medium-high"``, ``"MEDIUM_HIGH"``...)."""

    if isinstance(name, CompressionLevel):
        return name
    key = name.strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return _BY_NAME[key]
    except KeyError as exc:
        raise ValueError(f"Unknown compression level: {name}") from exc


def level_names() -> list[str]:
    return [level.name for level in LEVELS]


def start_for_size(size_bytes: int) -> CompressionLevel:
    """Pick a starting preset from the input size.

    Inputs that round to at least one megabyte start in the middle of the
    table, smaller ones from the bottom. Unknown sizes use ``MEDIUM``.
    """

    if size_bytes <= 0:
        return MEDIUM
    if math.floor(size_bytes / (1024.0 * 1024.0) + 0.5) >= 1:
        return LOW_MEDIUM
    return VERY_LOW

