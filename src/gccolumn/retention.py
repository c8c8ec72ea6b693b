"""Retention of a solute on the stationary phase.

Ideal thermodynamic model with the distribution-centric parameters
(Tchar, θchar, ΔCp):

    ln k₀ = (ΔCp/R + Tchar/θchar)(Tchar/T - 1) + ΔCp/R ln(T/Tchar)
    k = φ/φ₀ exp(ln k₀),    φ = df/d

Source: Blumberg, Temperature-Programmed Gas Chromatography, Wiley-VCH (2010).
"""

from __future__ import annotations

import math

from .cases import ColumnCase, Solute, TemperatureFn
from .constants import R_MOLAR
from .errors import DomainError
from .flow import mobile_phase_residency
from .geometry import Profile1D


def retention_factor(
    x: float,
    t: float,
    T: TemperatureFn,
    d: Profile1D,
    df: Profile1D,
    Tchar: float,
    thetachar: float,
    dCp: float,
    phi0: float,
) -> float:
    if Tchar == 0.0 and thetachar == 0.0 and dCp == 0.0:
        # non-retained marker
        return 0.0
    if thetachar == 0.0:
        raise DomainError("θchar must be non-zero for a retained solute")
    if not (Tchar > 0.0):
        raise DomainError(f"Tchar must be > 0 K, got {Tchar}")
    if not (phi0 > 0.0):
        raise DomainError(f"φ₀ must be > 0, got {phi0}")
    T_xt = T(x, t)
    if not (T_xt > 0.0):
        raise DomainError(f"temperature must be > 0 K, got {T_xt} at x={x:g}, t={t:g}")
    phi = df(x) / d(x)
    C = dCp / R_MOLAR
    lnk0 = (C + Tchar / thetachar) * (Tchar / T_xt - 1.0) + C * math.log(T_xt / Tchar)
    try:
        k0 = math.exp(lnk0)
    except OverflowError:
        raise DomainError(
            f"retention factor overflows (ln k₀ = {lnk0:g}) at T={T_xt:g} K"
        ) from None
    return phi / phi0 * k0


def solute_retention_factor(x: float, t: float, case: ColumnCase, solute: Solute) -> float:
    return retention_factor(
        x,
        t,
        case.T,
        case.d,
        case.df,
        solute.Tchar,
        solute.thetachar,
        solute.dCp,
        solute.phi0,
    )


def residency(x: float, t: float, case: ColumnCase, solute: Solute) -> float:
    """Residency (inverse velocity) [s/m] of the solute at (x, t).

    This is dt/dx of the solute migration, integrated by the caller.
    """
    rM = mobile_phase_residency(x, t, case)
    return rM * (1.0 + solute_retention_factor(x, t, case, solute))
