from __future__ import annotations

from dataclasses import asdict, dataclass

import numpy as np

from .cases import ColumnCase, Solute
from .broadening import plate_height
from .flow import (
    flow,
    holdup_time,
    inlet_pressure,
    mobile_phase_residency,
    pressure_model,
)
from .retention import residency, solute_retention_factor
from .validity import evaluate_validity_flags


@dataclass
class ColumnSnapshot:
    t: float
    x: np.ndarray
    T: np.ndarray
    p: np.ndarray
    kappa: np.ndarray
    u_M: np.ndarray
    pin: float
    pout: float
    F: float
    tM: float
    meta: dict
    k: np.ndarray | None = None
    r: np.ndarray | None = None
    H: np.ndarray | None = None


def summarize_column(
    case: ColumnCase, t: float, n_x: int = 51, solute: Solute | None = None
) -> ColumnSnapshot:
    """Evaluate the carrier-gas (and optionally solute) fields along the column at time t."""
    if n_x < 2:
        raise ValueError("n_x must be >= 2")
    t = float(t)
    model = pressure_model(case)
    x = np.linspace(0.0, case.L, int(n_x))

    T = np.array([case.T(float(xx), t) for xx in x], dtype=float)
    p = np.array([model.pressure(float(xx), t, case) for xx in x], dtype=float)
    kappa = np.array(
        [model.flow_restriction(float(xx), t, case) for xx in x], dtype=float
    )
    rM = np.array(
        [mobile_phase_residency(float(xx), t, case) for xx in x], dtype=float
    )
    # inf at a vacuum outlet
    with np.errstate(divide="ignore"):
        u_M = 1.0 / rM

    k = r = H = None
    if solute is not None:
        k = np.array(
            [solute_retention_factor(float(xx), t, case, solute) for xx in x],
            dtype=float,
        )
        r = np.array([residency(float(xx), t, case, solute) for xx in x], dtype=float)
        H = np.array(
            [plate_height(float(xx), t, case, solute) for xx in x], dtype=float
        )

    meta = {
        "model": model.name,
        "options": {
            "ng": case.options.ng,
            "vis": case.options.vis.value,
            "control": case.options.control.value,
        },
        "gas": case.gas.value,
        "L_m": case.L,
        "solute": asdict(solute) if solute is not None else None,
        "validity_flags": evaluate_validity_flags(case, np.array([t])),
    }
    return ColumnSnapshot(
        t=t,
        x=x,
        T=T,
        p=p,
        kappa=kappa,
        u_M=u_M,
        pin=inlet_pressure(t, case),
        pout=float(case.pout(t)),
        F=flow(t, case),
        tM=holdup_time(t, case),
        meta=meta,
        k=k,
        r=r,
        H=H,
    )
