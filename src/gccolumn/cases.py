from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .errors import UnsupportedGas, UnsupportedModel, UnsupportedViscosityModel
from .geometry import Column


class Gas(str, Enum):
    HE = "He"
    H2 = "H2"
    N2 = "N2"
    AR = "Ar"


class ViscosityModel(str, Enum):
    BLUMBERG = "Blumberg"
    HP = "HP"


class Control(str, Enum):
    PRESSURE = "Pressure"
    FLOW = "Flow"


def _choices(enum_cls) -> str:
    return ", ".join(m.value for m in enum_cls)


def as_gas(gas: Gas | str) -> Gas:
    try:
        return Gas(gas)
    except ValueError:
        raise UnsupportedGas(
            f"Unknown selection of gas {gas!r}. Choose one of these: {_choices(Gas)}."
        ) from None


def as_viscosity_model(vis: ViscosityModel | str) -> ViscosityModel:
    try:
        return ViscosityModel(vis)
    except ValueError:
        raise UnsupportedViscosityModel(
            f"Unknown selection for the viscosity model {vis!r}. "
            f"Choose one of these: {_choices(ViscosityModel)}."
        ) from None


def as_control(control: Control | str) -> Control:
    try:
        return Control(control)
    except ValueError:
        raise UnsupportedModel(
            f"Unknown control mode {control!r}. Choose one of these: {_choices(Control)}."
        ) from None


@dataclass(frozen=True)
class ModelOptions:
    ng: bool = False  # True: uniform closed forms, False: gradient integrals
    vis: ViscosityModel = ViscosityModel.BLUMBERG
    control: Control = Control.PRESSURE

    def __post_init__(self) -> None:
        object.__setattr__(self, "ng", bool(self.ng))
        object.__setattr__(self, "vis", as_viscosity_model(self.vis))
        object.__setattr__(self, "control", as_control(self.control))


@dataclass(frozen=True)
class Solute:
    """Thermodynamic (Tchar, θchar, ΔCp, φ₀) and diffusion (Cag) parameters."""

    name: str
    Tchar: float
    thetachar: float
    dCp: float
    phi0: float
    Cag: float

    @property
    def is_marker(self) -> bool:
        return self.Tchar == 0.0 and self.thetachar == 0.0 and self.dCp == 0.0


TemperatureFn = Callable[[float, float], float]
TimeFn = Callable[[float], float]


@dataclass(frozen=True)
class ColumnCase:
    """Everything needed to evaluate the carrier-gas fields of one run.

    Fpin is the inlet pressure [Pa(a)] for Control.PRESSURE or the normalized
    inlet flow [m³/s] for Control.FLOW.
    """

    column: Column
    T: TemperatureFn
    Fpin: TimeFn
    pout: TimeFn
    gas: Gas
    options: ModelOptions = ModelOptions()

    def __post_init__(self) -> None:
        object.__setattr__(self, "gas", as_gas(self.gas))

    @property
    def L(self) -> float:
        return self.column.L

    @property
    def d(self):
        return self.column.d

    @property
    def df(self):
        return self.column.df
