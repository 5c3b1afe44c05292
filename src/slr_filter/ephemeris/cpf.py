"""Reader for ILRS Consolidated Prediction Format (CPF) ephemerides.

Only what the TOF predictor needs is extracted:

- ``H1`` basic header: format version, ephemeris source, target name
- ``10`` position records: ``10 <dir> <mjd> <sod> <leap> <x> <y> <z>``
  (geocentric metres)
- ``99`` end of ephemeris

Other record types (velocities, corrections, comments) are skipped.
Records with direction flag 2 (receive-only epochs) are dropped so the table
holds one position per epoch.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from slr_filter.domain.ephemeris import EphemerisRecord
from slr_filter.errors import EphemerisLoadError

logger = logging.getLogger(__name__)

RECEIVE_ONLY_DIRECTION = 2


@dataclass(frozen=True)
class CPFHeader:
    version: int | None = None
    source: str | None = None
    target_name: str | None = None


@dataclass(frozen=True)
class CPFEphemeris:
    """Parsed CPF content: header and chronologically sorted position records."""

    header: CPFHeader
    records: tuple[EphemerisRecord, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.records)

    @property
    def first_epoch(self) -> tuple[int, float] | None:
        if not self.records:
            return None
        return (self.records[0].mjd, self.records[0].seconds_of_day)

    @property
    def last_epoch(self) -> tuple[int, float] | None:
        if not self.records:
            return None
        return (self.records[-1].mjd, self.records[-1].seconds_of_day)


def _parse_header(tokens: list[str]) -> CPFHeader:
    version: int | None
    try:
        version = int(tokens[2])
    except (IndexError, ValueError):
        version = None
    source = tokens[3] if len(tokens) > 3 else None
    target = tokens[-1] if len(tokens) >= 10 else None
    return CPFHeader(version=version, source=source, target_name=target)


def _parse_position(tokens: list[str], line_number: int, origin: str) -> EphemerisRecord | None:
    if len(tokens) < 8:
        raise EphemerisLoadError(
            origin, f"line {line_number}: position record has {len(tokens)} fields, need 8"
        )
    try:
        direction = int(tokens[1])
        mjd = int(tokens[2])
        sod = float(tokens[3])
        position = (float(tokens[5]), float(tokens[6]), float(tokens[7]))
    except ValueError as exc:
        raise EphemerisLoadError(origin, f"line {line_number}: {exc}") from exc

    if direction == RECEIVE_ONLY_DIRECTION:
        return None
    return EphemerisRecord(mjd=mjd, seconds_of_day=sod, position=position)


def parse_cpf_lines(lines: Iterable[str], origin: str = "<memory>") -> CPFEphemeris:
    """Parse CPF text lines.

    Raises:
        EphemerisLoadError: If a position record is malformed or no position
            records are found.
    """
    header = CPFHeader()
    records: dict[tuple[int, float], EphemerisRecord] = {}

    for line_number, line in enumerate(lines, start=1):
        tokens = line.split()
        if not tokens:
            continue
        record_type = tokens[0].upper()
        if record_type == "H1":
            header = _parse_header(tokens)
        elif record_type == "10":
            record = _parse_position(tokens, line_number, origin)
            if record is not None:
                records[(record.mjd, record.seconds_of_day)] = record
        elif record_type == "99":
            break

    if not records:
        raise EphemerisLoadError(origin, "no position records found")

    ordered = tuple(sorted(records.values()))
    logger.debug(f"Parsed {len(ordered)} CPF position records from {origin}")
    return CPFEphemeris(header=header, records=ordered)


def parse_cpf(path: str | Path) -> CPFEphemeris:
    """Read and parse a CPF file.

    Raises:
        EphemerisLoadError: On I/O errors, malformed records or an empty table.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise EphemerisLoadError(str(path), str(exc)) from exc
    return parse_cpf_lines(text.splitlines(), origin=str(path))
