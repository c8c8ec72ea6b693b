"""Chemical identity lookup (formula, SMILES, molar mass) by CAS or PubChem id.

Lookups never raise for unknown or malformed identifiers: they return None,
and missing cells of a known substance are None as well. The diffusivity
estimate fails when it needs one of the missing values.
"""

from __future__ import annotations

import csv
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

log = logging.getLogger(__name__)

_CAS = re.compile(r"^[1-9]\d{1,6}-\d{2}-\d$")


@dataclass(frozen=True)
class ChemicalRecord:
    name: str
    CAS: str | None = None
    formula: str | None = None
    MW: float | None = None
    smiles: str | None = None
    pubchem: int | None = None


class ChemicalRepository(Protocol):
    def lookup(self, identifier: str) -> ChemicalRecord | None: ...


def is_cas(identifier: str) -> bool:
    """CAS registry number with a valid check digit, e.g. '124-18-5'."""
    if not _CAS.match(identifier):
        return False
    digits = identifier.replace("-", "")
    body, check = digits[:-1], int(digits[-1])
    total = sum(i * int(c) for i, c in enumerate(reversed(body), start=1))
    return total % 10 == check


def parse_identifier(identifier: str) -> tuple[str, str] | None:
    """Return ("cas", number) or ("pubchem", cid); None if malformed."""
    s = identifier.strip()
    parts = s.split()
    if len(parts) == 2 and parts[0].lower() == "pubchem":
        if parts[1].isdigit():
            return "pubchem", str(int(parts[1]))
        return None
    if is_cas(s):
        return "cas", s
    return None


class TableRepository:
    """In-memory substance table."""

    def __init__(self, records: Iterable[ChemicalRecord]) -> None:
        self._by_key: dict[tuple[str, str], ChemicalRecord] = {}
        for rec in records:
            if rec.CAS:
                self._by_key[("cas", rec.CAS)] = rec
            if rec.pubchem is not None:
                self._by_key[("pubchem", str(rec.pubchem))] = rec

    def __len__(self) -> int:
        return len({id(rec) for rec in self._by_key.values()})

    def lookup(self, identifier: str) -> ChemicalRecord | None:
        key = parse_identifier(identifier)
        if key is None:
            log.debug("malformed chemical identifier %r", identifier)
            return None
        return self._by_key.get(key)

    @classmethod
    def load_csv(cls, path: str | Path) -> TableRepository:
        """Load CSV with header columns Name,CAS,formula,MW,smiles[,PubChem]."""

        def cell(row: dict, key: str) -> str | None:
            val = (row.get(key) or "").strip()
            return val or None

        records = []
        with Path(path).open(newline="", encoding="utf-8") as fh:
            for row in csv.DictReader(fh):
                mw = cell(row, "MW")
                cid = cell(row, "PubChem")
                records.append(
                    ChemicalRecord(
                        name=cell(row, "Name") or "",
                        CAS=cell(row, "CAS"),
                        formula=cell(row, "formula"),
                        MW=float(mw) if mw is not None else None,
                        smiles=cell(row, "smiles"),
                        pubchem=int(cid) if cid is not None else None,
                    )
                )
        log.debug("loaded %d substances from %s", len(records), path)
        return cls(records)


class CachedRepository:
    """Read-through cache in front of another repository."""

    def __init__(self, backend: ChemicalRepository) -> None:
        self._backend = backend
        self._cache: dict[str, ChemicalRecord | None] = {}

    def lookup(self, identifier: str) -> ChemicalRecord | None:
        try:
            return self._cache[identifier]
        except KeyError:
            pass
        rec = self._backend.lookup(identifier)
        return self._cache.setdefault(identifier, rec)

    def clear(self) -> None:
        self._cache.clear()
