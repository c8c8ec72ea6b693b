from __future__ import annotations

import numpy as np

from .cases import ColumnCase, Control
from .errors import DomainError


def _sample_T(case: ColumnCase, x: float, t: float) -> float:
    try:
        return case.T(x, t)
    except DomainError:
        return float("nan")


def _temperature_flag(case: ColumnCase, t: np.ndarray) -> dict:
    L = case.L
    T_in = np.array([_sample_T(case, 0.0, float(tt)) for tt in t], dtype=float)
    T_out = np.array([_sample_T(case, L, float(tt)) for tt in t], dtype=float)
    if not np.all(np.isfinite(T_in)) or not np.all(np.isfinite(T_out)):
        return {"status": "fail", "message": "Temperature field is not finite or not > 0 K"}
    min_T = float(min(np.min(T_in), np.min(T_out)))
    if min_T <= 0.0:
        return {
            "status": "fail",
            "min_T_K": min_T,
            "message": "Temperature must be > 0 K",
        }
    return {"status": "ok", "min_T_K": min_T}


def _pressure_order_flag(case: ColumnCase, t: np.ndarray) -> dict:
    pout = np.array([case.pout(float(tt)) for tt in t], dtype=float)
    if np.any(pout < 0.0):
        return {
            "status": "fail",
            "min_pout_Pa": float(np.min(pout)),
            "message": "Outlet pressure must be >= 0",
        }
    if case.options.control is Control.FLOW:
        return {
            "status": "ok",
            "min_pout_Pa": float(np.min(pout)),
            "message": "Inlet pressure follows from the flow",
        }
    pin = np.array([case.Fpin(float(tt)) for tt in t], dtype=float)
    dp = pin - pout
    min_dp = float(np.min(dp))
    if min_dp < 0.0:
        status, msg = "fail", "Inlet pressure below outlet pressure"
    elif min_dp == 0.0:
        status, msg = "warning", "No pressure drop; residency is undefined"
    else:
        status, msg = "ok", ""
    return {
        "status": status,
        "min_dp_Pa": min_dp,
        "t_min_dp_s": float(t[int(np.argmin(dp))]),
        "message": msg,
    }


def _flow_flag(case: ColumnCase, t: np.ndarray) -> dict:
    if case.options.control is not Control.FLOW:
        return {"status": "ok", "message": "Pressure control"}
    F = np.array([case.Fpin(float(tt)) for tt in t], dtype=float)
    min_F = float(np.min(F))
    return {
        "status": "ok" if min_F > 0.0 else "fail",
        "min_F_m3s": min_F,
        "message": "" if min_F > 0.0 else "Flow must be > 0",
    }


def evaluate_validity_flags(case: ColumnCase, t: np.ndarray) -> dict:
    """Check the run inputs on the time grid t before evaluating the fields."""
    t = np.atleast_1d(np.asarray(t, dtype=float))
    flags = {
        "temperature_positive": _temperature_flag(case, t),
        "pressure_order": _pressure_order_flag(case, t),
        "flow_positive": _flow_flag(case, t),
    }

    if case.options.control is not Control.PRESSURE:
        flags["inlet_pressure_units"] = {"status": "ok", "message": "Flow control"}
        return flags
    max_in = float(max(case.Fpin(float(tt)) for tt in t))
    flags["inlet_pressure_units"] = {
        "status": "warning" if 50.0 <= max_in <= 1000.0 else "ok",
        "max_pin_Pa": max_in,
        "message": "Values in 50-1000 range are often kPa entered as Pa",
    }
    return flags
