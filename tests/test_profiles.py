from pathlib import Path

import numpy as np
import pytest

from gccolumn.errors import DomainError
from gccolumn.geometry import Column, Constant, LinearProfile
from gccolumn.profiles import (
    Program,
    TemperatureField,
    make_program,
    make_program_from_table,
    make_ramp_program,
    uniform_temperature,
)


def test_program_interpolates_and_clamps():
    prog = Program("T", (0.0, 60.0, 120.0), (313.15, 313.15, 373.15))
    assert prog(30.0) == pytest.approx(313.15)
    assert prog(90.0) == pytest.approx(343.15)
    assert prog(-5.0) == pytest.approx(313.15)
    assert prog(1e4) == pytest.approx(373.15)
    np.testing.assert_allclose(prog.values_at(np.array([0.0, 90.0])), [313.15, 343.15])


def test_program_rejects_unordered_breakpoints():
    with pytest.raises(ValueError, match="strictly increasing"):
        Program("bad", (0.0, 10.0, 5.0), (1.0, 2.0, 3.0))


def test_constant_program():
    prog = Program.constant(2e5)
    assert prog(0.0) == 2e5
    assert prog(1234.5) == 2e5


def test_make_program_uses_step_durations():
    prog = make_program("T", [0.0, 60.0, 600.0], [313.15, 313.15, 573.15])
    assert prog.t == (0.0, 60.0, 660.0)
    assert prog(360.0) == pytest.approx(443.15)


def test_make_ramp_program_gc_notation():
    prog = make_ramp_program("T", 40.0, [(10.0, 200.0, 2.0), (20.0, 300.0, 0.0)], 1.0)
    # 1 min hold, 16 min ramp, 2 min hold, 5 min ramp
    assert prog.t == pytest.approx((0.0, 60.0, 1020.0, 1140.0, 1440.0))
    assert prog(540.0) == pytest.approx(120.0)
    assert prog(1440.0) == pytest.approx(300.0)


def test_program_table_warns_for_kpa_looking_values(tmp_path: Path):
    p = tmp_path / "pin.csv"
    p.write_text("0,250\n600,300\n", encoding="utf-8")
    with pytest.warns(UserWarning, match="looks like kPa"):
        make_program_from_table("pin", p, unit="Pa")


def test_program_table_converts_units(tmp_path: Path):
    p = tmp_path / "pin.csv"
    p.write_text("0,250\n600,300\n", encoding="utf-8")
    prog = make_program_from_table("pin", p, unit="kPa")
    assert prog(0.0) == pytest.approx(250e3)
    assert prog(300.0) == pytest.approx(275e3)

    T = tmp_path / "T.csv"
    T.write_text("0,40\n", encoding="utf-8")
    assert make_program_from_table("T", T, unit="degC")(10.0) == pytest.approx(313.15)


def test_program_table_rejects_unknown_unit(tmp_path: Path):
    p = tmp_path / "pin.csv"
    p.write_text("0,1\n1,2\n", encoding="utf-8")
    with pytest.raises(ValueError, match="unit must be one of"):
        make_program_from_table("pin", p, unit="atm")


def test_temperature_field_linear_gradient():
    field = TemperatureField(Program.constant(400.0), 10.0, Program.constant(20.0))
    assert field(0.0, 5.0) == pytest.approx(400.0)
    assert field(5.0, 5.0) == pytest.approx(390.0)
    assert field(10.0, 5.0) == pytest.approx(380.0)


def test_temperature_field_rejects_nonpositive():
    field = TemperatureField(Program.constant(10.0), 1.0, Program.constant(20.0))
    with pytest.raises(DomainError):
        field(1.0, 0.0)


def test_uniform_temperature():
    T = uniform_temperature(350.0, 10.0)
    assert T(0.0, 0.0) == T(10.0, 1e3) == 350.0


def test_column_normalizes_constants_to_callables():
    col = Column(10.0, 0.25e-3, 0.25e-6)
    assert isinstance(col.d, Constant)
    assert col.d(3.0) == 0.25e-3
    assert col.phase_ratio(1.0) == pytest.approx(1e-3)


def test_column_tapered_diameter():
    col = Column(10.0, LinearProfile(0.25e-3, 0.20e-3, 10.0))
    assert col.d(5.0) == pytest.approx(0.225e-3)


def test_column_rejects_nonpositive_geometry():
    with pytest.raises(ValueError):
        Column(0.0, 0.25e-3)
    with pytest.raises(ValueError):
        Column(10.0, 0.0)
