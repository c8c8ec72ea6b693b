"""Dynamic viscosity of the carrier gas.

Blumberg fit: η = η_st (T/T_st)^(ξ₀ + ξ₁ (T - T_st)/T_st).
Source: Blumberg, Temperature-Programmed Gas Chromatography, Wiley-VCH (2010).

HP fit: η = C₁ T + C₂, the linear model of the HP flow calculator.
"""

from __future__ import annotations

from .cases import Gas, TemperatureFn, ViscosityModel, as_gas, as_viscosity_model
from .constants import TST
from .errors import DomainError, UnsupportedGas

# gas: (η_st [Pa·s], ξ₀, ξ₁)
_BLUMBERG = {
    Gas.HE: (18.63e-6, 0.6958, -0.0071),
    Gas.H2: (8.382e-6, 0.6892, 0.005),
    Gas.N2: (16.62e-6, 0.7665, -0.0378),
    Gas.AR: (21.04e-6, 0.8131, -0.0426),
}

# gas: (C₁ [Pa·s/K], C₂ [Pa·s])
_HP = {
    Gas.HE: (4.28e-8, 6.968e-6),
    Gas.H2: (3.5e-8, 7.994e-6),
    Gas.N2: (1.83e-8, 4.416e-6),
}


def _unsupported(gas: Gas, table: dict) -> UnsupportedGas:
    names = ", ".join(g.value for g in table)
    return UnsupportedGas(
        f"Gas {gas.value!r} is not covered by this viscosity model. "
        f"Choose one of these: {names}."
    )


def _blumberg(T: float, gas: Gas) -> float:
    try:
        eta_st, xi0, xi1 = _BLUMBERG[gas]
    except KeyError:
        raise _unsupported(gas, _BLUMBERG) from None
    return eta_st * (T / TST) ** (xi0 + xi1 * (T - TST) / TST)


def _hp(T: float, gas: Gas) -> float:
    try:
        c1, c2 = _HP[gas]
    except KeyError:
        raise _unsupported(gas, _HP) from None
    return c1 * T + c2


_MODELS = {
    ViscosityModel.BLUMBERG: _blumberg,
    ViscosityModel.HP: _hp,
}


def viscosity(
    T: float,
    gas: Gas | str,
    vis: ViscosityModel | str = ViscosityModel.BLUMBERG,
) -> float:
    """Dynamic viscosity [Pa·s] of `gas` at temperature T [K]."""
    model = _MODELS[as_viscosity_model(vis)]
    gas = as_gas(gas)
    if not (T > 0.0):
        raise DomainError(f"temperature must be > 0 K, got {T}")
    return model(float(T), gas)


def viscosity_at(
    x: float,
    t: float,
    T: TemperatureFn,
    gas: Gas | str,
    vis: ViscosityModel | str = ViscosityModel.BLUMBERG,
) -> float:
    """Viscosity at position x [m] and time t [s] of the temperature field T(x, t)."""
    return viscosity(T(x, t), gas, vis)
