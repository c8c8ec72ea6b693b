from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path

from .cases import ColumnCase, Control, Gas, ModelOptions, Solute, ViscosityModel
from .geometry import Column, LinearProfile, mm_to_m, um_to_m
from .profiles import TemperatureField, make_program

ALLOWED_GAS = {g.value for g in Gas}
ALLOWED_VIS = {v.value for v in ViscosityModel}
ALLOWED_CONTROL = {c.value for c in Control}


@dataclass
class ColumnConfig:
    # column (SI unless suffix says otherwise)
    L_m: float = 30.0
    d_mm: float = 0.25
    d_out_mm: float | None = None  # tapered column if set
    df_um: float = 0.25
    gas: str = "He"

    # model options
    ng: bool = False
    vis: str = "Blumberg"
    control: str = "Pressure"

    # programs: step durations [s] and values at the end of each step
    time_steps_s: list[float] = field(default_factory=lambda: [0.0, 60.0, 1200.0])
    temp_steps_C: list[float] = field(default_factory=lambda: [40.0, 40.0, 300.0])
    gradient_steps_K: list[float] | None = None
    # Pa(a) for Pressure control, m³/s for Flow control
    inlet_steps: list[float] = field(
        default_factory=lambda: [250e3, 250e3, 250e3]
    )
    pout_steps_Pa: list[float] = field(
        default_factory=lambda: [101.3e3, 101.3e3, 101.3e3]
    )

    def validate(self) -> None:
        if self.gas not in ALLOWED_GAS:
            raise ValueError("gas is invalid")
        if self.vis not in ALLOWED_VIS:
            raise ValueError("vis is invalid")
        if self.control not in ALLOWED_CONTROL:
            raise ValueError("control is invalid")
        for name in ["L_m", "d_mm"]:
            if getattr(self, name) <= 0.0:
                raise ValueError(f"{name} must be > 0")
        if self.d_out_mm is not None and self.d_out_mm <= 0.0:
            raise ValueError("d_out_mm must be > 0")
        if self.df_um < 0.0:
            raise ValueError("df_um must be >= 0")
        n = len(self.time_steps_s)
        steps = {
            "temp_steps_C": self.temp_steps_C,
            "inlet_steps": self.inlet_steps,
            "pout_steps_Pa": self.pout_steps_Pa,
        }
        if self.gradient_steps_K is not None:
            steps["gradient_steps_K"] = self.gradient_steps_K
        for name, values in steps.items():
            if len(values) != n:
                raise ValueError(f"{name} must have {n} entries like time_steps_s")
        if n == 0:
            raise ValueError("time_steps_s must not be empty")

    def to_column(self) -> Column:
        self.validate()
        L = self.L_m
        d_in = mm_to_m(self.d_mm)
        if self.d_out_mm is None:
            d = d_in
        else:
            d = LinearProfile(d_in, mm_to_m(self.d_out_mm), L)
        return Column(L, d, um_to_m(self.df_um))

    def to_case(self) -> ColumnCase:
        self.validate()
        temps_K = [T + 273.15 for T in self.temp_steps_C]
        gradient = None
        if self.gradient_steps_K is not None:
            gradient = make_program("gradient", self.time_steps_s, self.gradient_steps_K)
        return ColumnCase(
            column=self.to_column(),
            T=TemperatureField(
                make_program("temperature", self.time_steps_s, temps_K),
                self.L_m,
                gradient,
            ),
            Fpin=make_program("inlet", self.time_steps_s, self.inlet_steps),
            pout=make_program("outlet", self.time_steps_s, self.pout_steps_Pa),
            gas=Gas(self.gas),
            options=ModelOptions(ng=self.ng, vis=self.vis, control=self.control),
        )

    def to_json(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False, indent=2)

    @classmethod
    def from_json(cls, payload: str) -> ColumnConfig:
        return cls(**json.loads(payload))

    def save_json(self, path: str | Path) -> None:
        Path(path).write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load_json(cls, path: str | Path) -> ColumnConfig:
        return cls.from_json(Path(path).read_text(encoding="utf-8"))


def solute_from_dict(payload: dict) -> Solute:
    """Solute from a mapping with keys Name, Tchar [K], thetachar [°C], DeltaCp, phi0, Cag."""
    return Solute(
        name=str(payload.get("Name", "")),
        Tchar=float(payload["Tchar"]),
        thetachar=float(payload["thetachar"]),
        dCp=float(payload["DeltaCp"]),
        phi0=float(payload["phi0"]),
        Cag=float(payload["Cag"]),
    )
