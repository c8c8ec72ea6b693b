from pathlib import Path

import pytest

from gccolumn.cases import Control, Gas, ViscosityModel
from gccolumn.config import ColumnConfig, solute_from_dict
from gccolumn.flow import flow, holdup_time, pressure
from gccolumn.geometry import LinearProfile


def test_config_roundtrip_json(tmp_path: Path):
    cfg = ColumnConfig(
        L_m=15.0,
        d_mm=0.32,
        d_out_mm=0.25,
        gas="H2",
        vis="HP",
        gradient_steps_K=[10.0, 10.0, 40.0],
    )
    loaded = ColumnConfig.from_json(cfg.to_json())
    assert loaded == cfg

    p = tmp_path / "column.json"
    cfg.save_json(p)
    assert ColumnConfig.load_json(p) == cfg


@pytest.mark.parametrize(
    "field,value",
    [("gas", "Ne"), ("vis", "Sutherland"), ("control", "Velocity")],
)
def test_config_validation_rejects_bad_enum(field, value):
    cfg = ColumnConfig(**{field: value})
    with pytest.raises(ValueError):
        cfg.validate()


@pytest.mark.parametrize("field", ["L_m", "d_mm"])
def test_config_validation_rejects_nonpositive(field):
    with pytest.raises(ValueError, match=field):
        ColumnConfig(**{field: 0.0}).validate()


def test_config_validation_rejects_mismatched_steps():
    with pytest.raises(ValueError, match="temp_steps_C"):
        ColumnConfig(temp_steps_C=[40.0, 300.0]).validate()


def test_config_to_case():
    case = ColumnConfig().to_case()
    assert case.gas is Gas.HE
    assert case.options.vis is ViscosityModel.BLUMBERG
    assert case.options.control is Control.PRESSURE
    assert case.L == 30.0
    assert case.d(10.0) == pytest.approx(0.25e-3)
    assert case.df(10.0) == pytest.approx(0.25e-6)
    # 60 s hold at 40 °C, then ramp to 300 °C over 1200 s
    assert case.T(0.0, 30.0) == pytest.approx(313.15)
    assert case.T(0.0, 1260.0) == pytest.approx(573.15)
    assert pressure(0.0, 100.0, case) == pytest.approx(250e3)
    assert flow(0.0, case) > flow(1260.0, case) > 0.0
    assert holdup_time(1260.0, case) > holdup_time(0.0, case)


def test_config_tapered_column():
    col = ColumnConfig(d_mm=0.32, d_out_mm=0.25).to_column()
    assert isinstance(col.d, LinearProfile)
    assert col.d(0.0) == pytest.approx(0.32e-3)
    assert col.d(col.L) == pytest.approx(0.25e-3)


def test_solute_from_dict():
    s = solute_from_dict(
        {
            "Name": "decane",
            "Tchar": 430.0,
            "thetachar": 30.0,
            "DeltaCp": 100.0,
            "phi0": 1e-3,
            "Cag": 4.6e-5,
        }
    )
    assert s.name == "decane"
    assert s.dCp == 100.0
    assert not s.is_marker
