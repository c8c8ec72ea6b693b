from __future__ import annotations

from dataclasses import dataclass, replace

from .cases import ColumnCase, Control, Gas, ModelOptions
from .flow import flow, holdup_time, holdup_time_uniform, inlet_pressure, pressure
from .geometry import Column
from .profiles import Program, uniform_temperature


@dataclass(frozen=True)
class GateMetrics:
    errHoldup: float
    errFlow: float
    errPressure: float


def _reference_case(ng: bool, control: Control = Control.PRESSURE) -> ColumnCase:
    L, d = 30.0, 0.25e-3
    Fpin = 250e3 if control is Control.PRESSURE else 1.5e-8
    return ColumnCase(
        column=Column(L, d, 0.25e-6),
        T=uniform_temperature(393.15, L),
        Fpin=Program.constant(Fpin),
        pout=Program.constant(101.3e3),
        gas=Gas.HE,
        options=ModelOptions(ng=ng, control=control),
    )


def gate_uniform() -> GateMetrics:
    """Gradient integrals against the closed forms on an isothermal straight column."""
    uni = _reference_case(ng=True)
    grad = _reference_case(ng=False)
    t = 0.0
    L = grad.L

    tM_ref = holdup_time_uniform(
        393.15, uni.Fpin(t), uni.pout(t), L, uni.d(0.0), uni.gas
    )
    errHoldup = max(
        abs(holdup_time(t, uni) - tM_ref) / tM_ref,
        abs(holdup_time(t, grad) - tM_ref) / tM_ref,
    )
    F_uni = flow(t, uni)
    errFlow = abs(flow(t, grad) - F_uni) / F_uni
    errPressure = max(
        abs(pressure(x, t, grad) - pressure(x, t, uni)) / pressure(x, t, uni)
        for x in (0.0, 0.25 * L, 0.5 * L, 0.75 * L, L)
    )
    return GateMetrics(errHoldup=errHoldup, errFlow=errFlow, errPressure=errPressure)


def gate_flow_roundtrip(ng: bool = False) -> GateMetrics:
    """Pressure control -> flow -> flow control -> inlet pressure."""
    by_pressure = _reference_case(ng=ng, control=Control.PRESSURE)
    t = 0.0
    F = flow(t, by_pressure)
    by_flow = replace(
        by_pressure,
        Fpin=Program.constant(F),
        options=ModelOptions(ng=ng, control=Control.FLOW),
    )
    pin = by_pressure.Fpin(t)
    errPressure = max(
        abs(inlet_pressure(t, by_flow) - pin) / pin,
        abs(pressure(0.0, t, by_flow) - pin) / pin,
    )
    tM_p = holdup_time(t, by_pressure)
    errHoldup = abs(holdup_time(t, by_flow) - tM_p) / tM_p
    errFlow = abs(flow(t, by_flow) - F) / F
    return GateMetrics(errHoldup=errHoldup, errFlow=errFlow, errPressure=errPressure)
