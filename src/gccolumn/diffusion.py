"""Gas-phase diffusivity of a solute.

Fuller-Schettler-Giddings correlation with atomic diffusion volumes from
Fuller, Ensley, Giddings, J. Phys. Chem. 73 (1969) 3679-3685.

    Cag = p_n sqrt(1/M + 1/M_g) / (V_g^(1/3) + V_a^(1/3))² · 1e-7

Cag is the diffusivity at normalized pressure p_n; the local diffusion
coefficient follows as D_M = T^1.75 / p · Cag.
"""

from __future__ import annotations

import logging
import math
import re

from .cases import Gas, as_gas
from .chemicals import ChemicalRepository
from .constants import PN, RING_INCREMENT
from .errors import DomainError, MissingChemicalData

log = logging.getLogger(__name__)

# gas: (diffusion volume V_g [cm³], molar mass M_g [g/mol])
_GAS = {
    Gas.H2: (6.12, 2.02),
    Gas.HE: (2.67, 4.0),
    Gas.N2: (18.5, 28.01),
    Gas.AR: (16.2, 39.95),
}

ATOMIC_DIFFUSION_VOLUME = {
    "C": 15.9,
    "H": 2.31,
    "O": 6.11,
    "N": 4.54,
    "S": 22.9,
    "F": 14.7,
    "Cl": 21.0,
    "Br": 21.9,
    "I": 29.8,
}

_ELEMENT = re.compile(r"([A-Z][a-z]*)(\d*)")
_DIGIT = re.compile(r"[0-9]")


def formula_to_dict(formula: str | None) -> dict[str, int] | None:
    """Atom counts of a formula string, e.g. "C14H20O" -> {"C": 14, "H": 20, "O": 1}."""
    if formula is None:
        return None
    counts: dict[str, int] = {}
    for element, n in _ELEMENT.findall(formula):
        counts[element] = counts.get(element, 0) + (int(n) if n else 1)
    return counts


def ring_number(smiles: str | None) -> int | None:
    """Number of rings from the ring-closure digits of a SMILES string.

    The highest digit is taken as the ring count. Ring labels above 9
    (%nn notation) are not recognized.
    """
    if smiles is None:
        return None
    return max((int(c) for c in _DIGIT.findall(smiles)), default=0)


def molecular_diffusion_volume(formula: dict[str, int] | None, Rn: int | None) -> float:
    """Sum of atomic diffusion volumes minus the ring increments [cm³]."""
    if formula is None:
        raise MissingChemicalData("molecular formula is missing")
    if Rn is None:
        raise MissingChemicalData("ring number is missing (no SMILES)")
    unknown = sorted(set(formula) - set(ATOMIC_DIFFUSION_VOLUME))
    if unknown:
        log.warning("no diffusion volume for %s; counted as zero", ", ".join(unknown))
    Va = sum(
        ATOMIC_DIFFUSION_VOLUME[element] * n
        for element, n in formula.items()
        if element in ATOMIC_DIFFUSION_VOLUME
    )
    return Va - Rn * RING_INCREMENT


def _cag(M: float, Va: float, gas: Gas | str) -> float:
    Vg, Mg = _GAS[as_gas(gas)]
    if not (M > 0.0):
        raise DomainError(f"molar mass must be > 0, got {M}")
    if not (Va > 0.0):
        raise DomainError(f"molecular diffusion volume must be > 0, got {Va}")
    return PN * math.sqrt(1.0 / M + 1.0 / Mg) / (Vg ** (1 / 3) + Va ** (1 / 3)) ** 2 * 1e-7


def diffusivity(
    M: float,
    Cn: int,
    Hn: int,
    On: int,
    Nn: int,
    Rn: int,
    gas: Gas | str,
) -> float:
    """Diffusivity constant Cag [m²/s at p_n] from atom counts and ring number."""
    Va = 15.9 * Cn + 2.31 * Hn + 6.11 * On + 4.54 * Nn - RING_INCREMENT * Rn
    return _cag(M, Va, gas)


def diffusivity_from_formula(
    M: float, formula: dict[str, int] | None, Rn: int | None, gas: Gas | str
) -> float:
    return _cag(M, molecular_diffusion_volume(formula, Rn), gas)


def diffusivity_by_id(identifier: str, gas: Gas | str, repository: ChemicalRepository) -> float:
    """Diffusivity constant Cag of a substance given by CAS number or "PubChem <cid>"."""
    record = repository.lookup(identifier)
    if record is None:
        raise MissingChemicalData(f"no chemical data for {identifier!r}")
    Va = molecular_diffusion_volume(
        formula_to_dict(record.formula), ring_number(record.smiles)
    )
    if record.MW is None:
        raise MissingChemicalData(f"molar mass of {identifier!r} is missing")
    return _cag(record.MW, Va, gas)
