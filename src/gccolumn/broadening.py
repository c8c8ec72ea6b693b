"""Band broadening: diffusion in the mobile phase and the Golay plate height."""

from __future__ import annotations

import math

from .cases import ColumnCase, Solute
from .constants import DM_OVER_DS
from .errors import DomainError
from .flow import mobile_phase_residency, pressure
from .retention import solute_retention_factor


def diffusion_mobile(x: float, t: float, case: ColumnCase, Cag: float) -> float:
    """Diffusion coefficient D_M [m²/s] of the solute in the carrier gas at (x, t)."""
    if not (Cag > 0.0):
        raise DomainError(f"diffusivity constant must be > 0, got {Cag}")
    p = pressure(x, t, case)
    if not (p > 0.0):
        raise DomainError(f"pressure must be > 0 Pa for D_M, got {p:g} at x={x:g}")
    return case.T(x, t) ** 1.75 / p * Cag


def plate_height(x: float, t: float, case: ColumnCase, solute: Solute) -> float:
    """Local plate height H [m] from the Golay equation.

    H = 2 D_M/u_M + d²/96 (6μ² - 16μ + 11) u_M/D_M + 2/3 df² μ(1-μ) u_M/D_S

    with μ = 1/(1 + k) and D_S = D_M/10000.
    """
    d = case.d(x)
    df = case.df(x)
    DM = diffusion_mobile(x, t, case, solute.Cag)
    uM = 1.0 / mobile_phase_residency(x, t, case)
    mu = 1.0 / (1.0 + solute_retention_factor(x, t, case, solute))
    DS = DM / DM_OVER_DS
    H1 = 2.0 * DM / uM
    H2 = d**2 / 96.0 * (6.0 * mu**2 - 16.0 * mu + 11.0) * uM / DM
    H3 = 2.0 / 3.0 * df**2 * mu * (1.0 - mu) * uM / DS
    H = H1 + H2 + H3
    if not math.isfinite(H):
        raise DomainError(f"plate height is not finite at x={x:g}, t={t:g}")
    return H
