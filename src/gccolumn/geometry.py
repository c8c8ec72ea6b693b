from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


def mm_to_m(x_mm: float) -> float:
    return x_mm * 1e-3


def um_to_m(x_um: float) -> float:
    return x_um * 1e-6


def celsius_to_kelvin(T_C: float) -> float:
    return T_C + 273.15


def kpa_to_pa(p_kpa: float) -> float:
    return p_kpa * 1e3


def ml_min_to_m3_s(F_ml_min: float) -> float:
    return F_ml_min * 1e-6 / 60.0


def assert_pos(name: str, val: float) -> None:
    if not (val > 0.0):
        raise ValueError(f"{name} must be > 0, got {val}")


@dataclass(frozen=True)
class Constant:
    value: float

    def __call__(self, x: float | None = None) -> float:
        return float(self.value)


@dataclass(frozen=True)
class LinearProfile:
    """Linear change of a column property from inlet (x=0) to outlet (x=L)."""

    start: float
    end: float
    L: float

    def __call__(self, x: float) -> float:
        return self.start + (self.end - self.start) * x / self.L


Profile1D = Callable[[float], float]


@dataclass(frozen=True)
class Column:
    """Capillary column: length L [m], diameter d(x) [m], film thickness df(x) [m]."""

    L: float
    d: float | Profile1D
    df: float | Profile1D = 0.0

    def __post_init__(self) -> None:
        assert_pos("L", self.L)
        if not callable(self.d):
            assert_pos("d", float(self.d))
            object.__setattr__(self, "d", Constant(float(self.d)))
        if not callable(self.df):
            if float(self.df) < 0.0:
                raise ValueError(f"df must be >= 0, got {self.df}")
            object.__setattr__(self, "df", Constant(float(self.df)))

    def phase_ratio(self, x: float) -> float:
        """Dimensionless film thickness φ = df/d at position x."""
        return self.df(x) / self.d(x)
