import numpy as np
import pytest

from gccolumn.cases import ColumnCase, ModelOptions, Solute
from gccolumn.diagnostics import summarize_column
from gccolumn.diffusion import diffusivity
from gccolumn.geometry import Column
from gccolumn.profiles import Program, TemperatureField, uniform_temperature
from gccolumn.validity import evaluate_validity_flags

L = 30.0


def _case(Fpin=250e3, pout=101.3e3, T=None, control="Pressure", ng=False):
    return ColumnCase(
        column=Column(L, 0.25e-3, 0.25e-6),
        T=T if T is not None else uniform_temperature(373.15, L),
        Fpin=Fpin if isinstance(Fpin, Program) else Program.constant(Fpin),
        pout=Program.constant(pout),
        gas="He",
        options=ModelOptions(ng=ng, control=control),
    )


def test_validity_flags_ok_for_regular_run():
    flags = evaluate_validity_flags(_case(), np.linspace(0.0, 600.0, 7))
    assert set(flags) == {
        "temperature_positive",
        "pressure_order",
        "flow_positive",
        "inlet_pressure_units",
    }
    assert all(f["status"] == "ok" for f in flags.values())


def test_validity_detects_inlet_below_outlet():
    pin = Program("pin", (0.0, 100.0), (150e3, 90e3))
    flags = evaluate_validity_flags(_case(Fpin=pin), np.linspace(0.0, 100.0, 11))
    assert flags["pressure_order"]["status"] == "fail"
    assert flags["pressure_order"]["t_min_dp_s"] == pytest.approx(100.0)


def test_validity_warns_without_pressure_drop():
    flags = evaluate_validity_flags(_case(Fpin=101.3e3), np.array([0.0]))
    assert flags["pressure_order"]["status"] == "warning"


def test_validity_flags_kpa_entered_as_pa():
    flags = evaluate_validity_flags(_case(Fpin=250.0, pout=100.0), np.array([0.0]))
    assert flags["inlet_pressure_units"]["status"] == "warning"


def test_validity_flags_nonpositive_temperature():
    T = TemperatureField(Program.constant(100.0), L, Program.constant(150.0))
    flags = evaluate_validity_flags(_case(T=T), np.array([0.0, 10.0]))
    assert flags["temperature_positive"]["status"] == "fail"


def test_validity_flags_flow_control():
    flags = evaluate_validity_flags(
        _case(Fpin=-1e-8, control="Flow"), np.array([0.0, 1.0])
    )
    assert flags["flow_positive"]["status"] == "fail"
    assert flags["pressure_order"]["status"] == "ok"


def test_summarize_column_carrier_gas_fields():
    T = TemperatureField(
        Program("T", (0.0, 600.0), (323.15, 573.15)), L, Program.constant(20.0)
    )
    case = _case(T=T)
    snap = summarize_column(case, 300.0, n_x=21)

    assert snap.x.shape == (21,)
    assert snap.p[0] == pytest.approx(250e3, rel=1e-12)
    assert snap.p[-1] == pytest.approx(101.3e3, rel=1e-9)
    assert np.all(np.diff(snap.p) < 0.0)
    assert snap.kappa[0] == 0.0
    assert np.all(np.diff(snap.kappa) > 0.0)
    # gas accelerates towards the outlet
    assert np.all(np.diff(snap.u_M) > 0.0)
    assert snap.T[0] - snap.T[-1] == pytest.approx(20.0)
    assert snap.pin == 250e3
    assert snap.F > 0.0 and snap.tM > 0.0
    assert snap.k is None and snap.r is None and snap.H is None
    assert snap.meta["model"] == "gradient"
    assert snap.meta["options"]["control"] == "Pressure"
    assert snap.meta["validity_flags"]["pressure_order"]["status"] == "ok"


def test_summarize_column_with_solute():
    solute = Solute(
        "decane", 430.0, 30.0, 100.0, 1e-3, diffusivity(142.28, 10, 22, 0, 0, 0, "He")
    )
    snap = summarize_column(_case(ng=True), 0.0, n_x=5, solute=solute)
    assert snap.meta["model"] == "uniform"
    assert snap.meta["solute"]["name"] == "decane"
    assert np.all(snap.k > 0.0)
    assert np.all(snap.r > 1.0 / snap.u_M)
    assert np.all(snap.H > 0.0)


def test_summarize_column_needs_two_points():
    with pytest.raises(ValueError):
        summarize_column(_case(), 0.0, n_x=1)


def test_inlet_pressure_units_flag_under_flow_control():
    flags = evaluate_validity_flags(_case(Fpin=1e-8, control="Flow"), np.array([0.0]))
    assert flags["inlet_pressure_units"] == {"status": "ok", "message": "Flow control"}


def test_summarize_column_vacuum_outlet():
    snap = summarize_column(_case(pout=0.0), 0.0, n_x=11)
    assert snap.p[-1] == 0.0
    assert np.isinf(snap.u_M[-1])
    assert np.all(np.isfinite(snap.u_M[:-1]))
    assert snap.tM > 0.0
