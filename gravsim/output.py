"""
Comma-delimited trajectory output.

The first record names three columns per body (``<Name>X,<Name>Y,<Name>Z,``)
and every following record holds one ``x,y,z,`` triple per body, in
ensemble order. Records end with a trailing comma.
"""

from __future__ import annotations

import csv
from typing import Iterable, List, TextIO

from .vector import PhysicsVector, format_number


class TrajectoryWriter:
    def __init__(self, stream: TextIO, precision: int = 6) -> None:
        if precision < 1:
            raise ValueError("precision must be at least 1")
        self._writer = csv.writer(stream, lineterminator="\n")
        self.precision = precision
        self.records_written = 0

    def write_header(self, names: Iterable[str]) -> None:
        fields: List[str] = []
        for name in names:
            fields.extend((f"{name}X", f"{name}Y", f"{name}Z"))
        self._writer.writerow(fields + [""])

    def write_positions(self, positions: Iterable[PhysicsVector]) -> None:
        fields = [
            format_number(component, self.precision)
            for position in positions
            for component in position
        ]
        self._writer.writerow(fields + [""])
        self.records_written += 1
