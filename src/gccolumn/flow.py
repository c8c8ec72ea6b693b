"""Carrier-gas flow in a capillary column: flow restriction, pressure, flow,
hold-up time and residency of the mobile phase.

Two formulations of the same physics are provided. `UniformModel` uses the
closed forms that hold when temperature, diameter and viscosity do not change
along the column; `GradientModel` integrates the flow restriction

    κ(x, t) = ∫₀ˣ η(y, t) T(y, t) / d(y)⁴ dy

and is valid for thermal gradients and tapered columns. A run selects one of
them through `ModelOptions.ng`.
"""

from __future__ import annotations

import math

from .cases import (
    ColumnCase,
    Control,
    Gas,
    ViscosityModel,
    as_control,
)
from .constants import PN, TN
from .errors import DomainError
from .quadrature import integrate
from .viscosity import viscosity, viscosity_at

# relative round-off accepted in a radicand, e.g. at a vacuum outlet
_ROUNDOFF = 1e-12


def _sqrt(radicand: float, scale: float, what: str) -> float:
    if not math.isfinite(radicand):
        raise DomainError(f"non-finite radicand in {what}: {radicand}")
    if radicand < 0.0:
        if radicand >= -_ROUNDOFF * scale:
            return 0.0
        raise DomainError(f"negative radicand in {what}: {radicand:g}")
    return math.sqrt(radicand)


def _dp2(pin: float, pout: float) -> float:
    dp2 = pin**2 - pout**2
    if dp2 == 0.0:
        raise DomainError(f"inlet and outlet pressure are equal ({pin:g} Pa)")
    return dp2


def _positive_flow(F: float) -> float:
    if not (F > 0.0):
        raise DomainError(f"flow must be > 0 m³/s, got {F}")
    return F


def _restriction_density(y: float, t: float, case: ColumnCase) -> float:
    """η(y,t)·T(y,t)/d(y)⁴, the integrand of the flow restriction."""
    T = case.T(y, t)
    return viscosity(T, case.gas, case.options.vis) * T / case.d(y) ** 4


def _holdup_closed_form(L: float, d: float, eta: float, pin: float, pout: float) -> float:
    return 128.0 / 3.0 * L**2 / d**2 * eta * (pin**3 - pout**3) / _dp2(pin, pout) ** 2


class PressureModel:
    name = ""

    def flow_restriction(self, x: float, t: float, case: ColumnCase) -> float:
        raise NotImplementedError

    def pressure(self, x: float, t: float, case: ColumnCase) -> float:
        return self.pressure_and_restriction(x, t, case)[0]

    def pressure_and_restriction(
        self, x: float, t: float, case: ColumnCase
    ) -> tuple[float, float]:
        """Return p(x, t) together with κ(L, t) of the whole column."""
        raise NotImplementedError

    def inlet_pressure(self, t: float, case: ColumnCase) -> float:
        raise NotImplementedError

    def flow(self, t: float, case: ColumnCase) -> float:
        raise NotImplementedError

    def holdup_time(self, t: float, case: ColumnCase) -> float:
        raise NotImplementedError


class UniformModel(PressureModel):
    name = "uniform"

    def flow_restriction(self, x, t, case):
        return x * _restriction_density(x, t, case)

    def pressure_and_restriction(self, x, t, case):
        L = case.L
        pout = case.pout(t)
        if case.options.control is Control.PRESSURE:
            pin = case.Fpin(t)
            r = pin**2 - x / L * (pin**2 - pout**2)
            p = _sqrt(r, pin**2, "pressure")
        else:
            F = case.Fpin(t)
            r = pout**2 + 256.0 / math.pi * PN / TN * _restriction_density(
                x, t, case
            ) * F * (L - x)
            p = _sqrt(r, pout**2, "pressure")
        return p, self.flow_restriction(L, t, case)

    def inlet_pressure(self, t, case):
        if case.options.control is Control.PRESSURE:
            return case.Fpin(t)
        L = case.L
        pout = case.pout(t)
        # Blumberg viscosity at the inlet independent of case.options.vis
        eta = viscosity_at(0.0, t, case.T, case.gas, ViscosityModel.BLUMBERG)
        r = pout**2 + 256.0 / math.pi * PN / TN * eta * case.T(
            0.0, t
        ) * L / case.d(0.0) ** 4 * case.Fpin(t)
        return _sqrt(r, pout**2, "inlet pressure")

    def flow(self, t, case):
        if case.options.control is Control.FLOW:
            return case.Fpin(t)
        L = case.L
        pin, pout = case.Fpin(t), case.pout(t)
        T_L = case.T(L, t)
        eta = viscosity(T_L, case.gas, case.options.vis)
        return math.pi / 256.0 * TN / PN * case.d(L) ** 4 / L * (pin**2 - pout**2) / (
            eta * T_L
        )

    def holdup_time(self, t, case):
        L = case.L
        pin = self.inlet_pressure(t, case)
        eta = viscosity_at(L, t, case.T, case.gas, case.options.vis)
        return _holdup_closed_form(L, case.d(L), eta, pin, case.pout(t))


class GradientModel(PressureModel):
    name = "gradient"

    def flow_restriction(self, x, t, case):
        return integrate(lambda y: _restriction_density(y, t, case), 0.0, x)

    def _pressure(self, x: float, t: float, case: ColumnCase, kappa_L: float) -> float:
        kappa_x = self.flow_restriction(x, t, case)
        pout = case.pout(t)
        if case.options.control is Control.PRESSURE:
            pin = case.Fpin(t)
            r = pin**2 - kappa_x / kappa_L * (pin**2 - pout**2)
            return _sqrt(r, pin**2, "pressure")
        F = case.Fpin(t)
        r = pout**2 + 256.0 / math.pi * PN / TN * F * (kappa_L - kappa_x)
        return _sqrt(r, pout**2, "pressure")

    def pressure_and_restriction(self, x, t, case):
        kappa_L = self.flow_restriction(case.L, t, case)
        return self._pressure(x, t, case, kappa_L), kappa_L

    def inlet_pressure(self, t, case):
        if case.options.control is Control.PRESSURE:
            return case.Fpin(t)
        pout = case.pout(t)
        kappa_L = self.flow_restriction(case.L, t, case)
        r = pout**2 + 256.0 / math.pi * PN / TN * kappa_L * case.Fpin(t)
        return _sqrt(r, pout**2, "inlet pressure")

    def flow(self, t, case):
        if case.options.control is Control.FLOW:
            return case.Fpin(t)
        pin, pout = case.Fpin(t), case.pout(t)
        kappa_L = self.flow_restriction(case.L, t, case)
        return math.pi / 256.0 * TN / PN * (pin**2 - pout**2) / kappa_L

    def holdup_time(self, t, case):
        L = case.L
        kappa_L = self.flow_restriction(L, t, case)

        def f(y: float) -> float:
            return case.d(y) ** 2 * self._pressure(y, t, case, kappa_L) / case.T(y, t)

        integral = integrate(f, 0.0, L)
        if case.options.control is Control.PRESSURE:
            return 64.0 * kappa_L / _dp2(case.Fpin(t), case.pout(t)) * integral
        return math.pi / 4.0 * TN / PN * integral / _positive_flow(case.Fpin(t))


_MODELS = {True: UniformModel(), False: GradientModel()}


def pressure_model(case: ColumnCase) -> PressureModel:
    return _MODELS[case.options.ng]


def flow_restriction(x: float, t: float, case: ColumnCase) -> float:
    """Flow restriction κ [K·m⁻³·Pa·s] up to position x at time t."""
    return pressure_model(case).flow_restriction(x, t, case)


def pressure(x: float, t: float, case: ColumnCase) -> float:
    """Carrier-gas pressure [Pa(a)] at position x [m] and time t [s]."""
    return pressure_model(case).pressure(x, t, case)


def inlet_pressure(t: float, case: ColumnCase) -> float:
    return pressure_model(case).inlet_pressure(t, case)


def flow(t: float, case: ColumnCase) -> float:
    """Normalized carrier-gas flow [m³/s] at time t."""
    return pressure_model(case).flow(t, case)


def holdup_time(t: float, case: ColumnCase) -> float:
    """Time [s] an unretained marker needs to pass the column at the conditions of time t."""
    return pressure_model(case).holdup_time(t, case)


def mobile_phase_residency(x: float, t: float, case: ColumnCase) -> float:
    """Inverse linear velocity [s/m] of the carrier gas at (x, t)."""
    p, kappa_L = pressure_model(case).pressure_and_restriction(x, t, case)
    T = case.T(x, t)
    d = case.d(x)
    if case.options.control is Control.PRESSURE:
        rM = 64.0 * p * d**2 / T * kappa_L / _dp2(case.Fpin(t), case.pout(t))
    else:
        rM = math.pi / 4.0 * TN / PN * d**2 / _positive_flow(case.Fpin(t)) * p / T
    # zero only at a vacuum outlet, where p = 0
    if not (rM >= 0.0 and math.isfinite(rM)):
        raise DomainError(f"mobile phase residency must be >= 0, got {rM:g} at x={x:g}")
    return rM


def flow_uniform(
    T: float,
    Fpin: float,
    pout: float,
    L: float,
    d: float,
    gas: Gas | str,
    vis: ViscosityModel | str = ViscosityModel.BLUMBERG,
    control: Control | str = Control.PRESSURE,
) -> float:
    """Normalized flow [m³/s] of a column at constant temperature T."""
    if as_control(control) is Control.FLOW:
        return Fpin
    eta = viscosity(T, gas, vis)
    return math.pi / 256.0 * TN / PN * d**4 / L * (Fpin**2 - pout**2) / (eta * T)


def holdup_time_uniform(
    T: float,
    Fpin: float,
    pout: float,
    L: float,
    d: float,
    gas: Gas | str,
    vis: ViscosityModel | str = ViscosityModel.BLUMBERG,
    control: Control | str = Control.PRESSURE,
) -> float:
    """Hold-up time [s] of a column at constant temperature T."""
    eta = viscosity(T, gas, vis)
    if as_control(control) is Control.FLOW:
        eta_in = viscosity(T, gas, ViscosityModel.BLUMBERG)
        r = pout**2 + 256.0 / math.pi * PN / TN * eta_in * T * L / d**4 * Fpin
        pin = _sqrt(r, pout**2, "inlet pressure")
    else:
        pin = Fpin
    return _holdup_closed_form(L, d, eta, pin, pout)
