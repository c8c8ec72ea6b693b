from __future__ import annotations

import warnings
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from .errors import DomainError

_UNIT_SCALE = {
    "pa": (1.0, 0.0),
    "kpa": (1e3, 0.0),
    "bar": (1e5, 0.0),
    "psi": (6894.757, 0.0),
    "k": (1.0, 0.0),
    "degc": (1.0, 273.15),
    "m3/s": (1.0, 0.0),
    "ml/min": (1e-6 / 60.0, 0.0),
}


@dataclass(frozen=True)
class Program:
    """Time program: ordered breakpoints with linear interpolation.

    Outside the first/last breakpoint the end values are held constant.
    """

    name: str
    t: tuple[float, ...]
    values: tuple[float, ...]

    def __post_init__(self) -> None:
        t = tuple(float(tt) for tt in self.t)
        v = tuple(float(vv) for vv in self.values)
        if not t or len(t) != len(v):
            raise ValueError("Program needs the same non-zero number of times and values")
        if not np.all(np.diff(t) > 0):
            raise ValueError("Program time must be strictly increasing")
        object.__setattr__(self, "t", t)
        object.__setattr__(self, "values", v)

    def __call__(self, t: float) -> float:
        return float(np.interp(t, self.t, self.values))

    def values_at(self, t: np.ndarray) -> np.ndarray:
        return np.interp(np.asarray(t, dtype=float), self.t, self.values)

    @property
    def duration(self) -> float:
        return self.t[-1] - self.t[0]

    @classmethod
    def constant(cls, value: float, name: str = "constant") -> Program:
        return cls(name, (0.0,), (value,))


def make_program(
    name: str, time_steps: Sequence[float], value_steps: Sequence[float]
) -> Program:
    """Program from step durations [s]; time_steps[0] is the start time (usually 0)."""
    if len(time_steps) != len(value_steps):
        raise ValueError("time_steps and value_steps must have the same length")
    if any(dt < 0.0 for dt in time_steps[1:]):
        raise ValueError("time steps must be >= 0")
    t = np.cumsum(np.asarray(time_steps, dtype=float))
    v = np.asarray(value_steps, dtype=float)
    # zero-length steps are jumps; keep the later value
    keep = np.append(np.diff(t) > 0, True)
    return Program(name, tuple(t[keep]), tuple(v[keep]))


def make_ramp_program(
    name: str,
    initial: float,
    ramps: Sequence[tuple[float, float, float]],
    initial_hold_min: float = 0.0,
) -> Program:
    """Program in GC notation: initial value, hold, then (rate/min, final, hold_min) ramps."""
    t = [0.0]
    v = [float(initial)]
    if initial_hold_min > 0.0:
        t.append(initial_hold_min * 60.0)
        v.append(float(initial))
    for rate_per_min, final, hold_min in ramps:
        if rate_per_min <= 0.0:
            raise ValueError("ramp rate must be positive")
        t.append(t[-1] + abs(final - v[-1]) / rate_per_min * 60.0)
        v.append(float(final))
        if hold_min > 0.0:
            t.append(t[-1] + hold_min * 60.0)
            v.append(float(final))
    return make_program(name, [t[0]] + list(np.diff(t)), v)


def make_program_from_table(name: str, table_path: Path, unit: str = "Pa") -> Program:
    """Load program table with CSV columns: t_s,value.

    unit: "Pa" | "kPa" | "bar" | "psi" | "K" | "degC" | "m3/s" | "mL/min"
    """
    arr = np.loadtxt(str(table_path), delimiter=",", ndmin=2)
    if arr.shape[1] < 2:
        raise ValueError("Program table must be CSV with columns: t_s, value")
    try:
        scale, offset = _UNIT_SCALE[unit.lower()]
    except KeyError:
        raise ValueError(
            f"unit must be one of {', '.join(sorted(_UNIT_SCALE))}, got {unit!r}"
        ) from None

    t_tab = np.array(arr[:, 0], dtype=float)
    v_tab = np.array(arr[:, 1], dtype=float)
    if unit.lower() == "pa":
        v_max = float(np.max(v_tab))
        if 50.0 <= v_max <= 1000.0:
            warnings.warn(
                "Program table pressure looks like kPa values provided as Pa. "
                "Use unit='kPa' or convert CSV to Pa.",
                stacklevel=2,
            )
    return Program(name, tuple(t_tab), tuple(v_tab * scale + offset))


@dataclass(frozen=True)
class TemperatureField:
    """T(x, t) = program(t) - gradient(t) · x/L  [K].

    gradient is the temperature drop from inlet to outlet; None for a
    column without thermal gradient.
    """

    program: Program
    L: float
    gradient: Program | None = None

    def __call__(self, x: float, t: float) -> float:
        T = self.program(t)
        if self.gradient is not None:
            T -= self.gradient(t) * x / self.L
        if not (T > 0.0):
            raise DomainError(f"temperature must be > 0 K, got {T} at x={x:g}, t={t:g}")
        return T


def uniform_temperature(T_K: float, L: float = 1.0) -> TemperatureField:
    return TemperatureField(Program.constant(T_K, name="isothermal"), L)
