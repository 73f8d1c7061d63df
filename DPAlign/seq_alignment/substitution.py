"""
Substitution matrices usable as ``CostModel.substitution``.
"""

from __future__ import annotations

from typing import Callable, Dict, Tuple

UNKNOWN_PAIR_SCORE = -4

_BLOSUM62_TEXT = """
   A  R  N  D  C  Q  E  G  H  I  L  K  M  F  P  S  T  W  Y  V
A  4 -1 -2 -2  0 -1 -1  0 -2 -1 -1 -1 -1 -2 -1  1  0 -3 -2  0
R -1  5  0 -2 -3  1  0 -2  0 -3 -2  2 -1 -3 -2 -1 -1 -3 -2 -3
N -2  0  6  1 -3  0  0  0  1 -3 -3  0 -2 -3 -2  1  0 -4 -2 -3
D -2 -2  1  6 -3  0  2 -1 -1 -3 -4 -1 -3 -3 -1  0 -1 -4 -3 -3
C  0 -3 -3 -3  9 -3 -4 -3 -3 -1 -1 -3 -1 -2 -3 -1 -1 -2 -2 -1
Q -1  1  0  0 -3  5  2 -2  0 -3 -2  1  0 -3 -1  0 -1 -2 -1 -2
E -1  0  0  2 -4  2  5 -2  0 -3 -3  1 -2 -3 -1  0 -1 -3 -2 -2
G  0 -2  0 -1 -3 -2 -2  6 -2 -4 -4 -2 -3 -3 -2  0 -2 -2 -3 -3
H -2  0  1 -1 -3  0  0 -2  8 -3 -3 -1 -2 -1 -2 -1 -2 -2  2 -3
I -1 -3 -3 -3 -1 -3 -3 -4 -3  4  2 -3  1  0 -3 -2 -1 -3 -1  3
L -1 -2 -3 -4 -1 -2 -3 -4 -3  2  4 -2  2  0 -3 -2 -1 -2 -1  1
K -1  2  0 -1 -3  1  1 -2 -1 -3 -2  5 -1 -3 -1  0 -1 -3 -2 -2
M -1 -1 -2 -3 -1  0 -2 -3 -2  1  2 -1  5  0 -2 -1 -1 -1 -1  1
F -2 -3 -3 -3 -2 -3 -3 -3 -1  0  0 -3  0  6 -4 -2 -2  1  3 -1
P -1 -2 -2 -1 -3 -1 -1 -2 -2 -3 -3 -1 -2 -4  7 -1 -1 -4 -3 -2
S  1 -1  1  0 -1  0  0  0 -1 -2 -2  0 -1 -2 -1  4  1 -3 -2 -2
T  0 -1  0 -1 -1 -1 -1 -2 -2 -1 -1 -1 -1 -2 -1  1  5 -2 -2  0
W -3 -3 -4 -4 -2 -2 -3 -2 -2 -3 -2 -3 -1  1 -4 -3 -2 11  2 -3
Y -2 -2 -2 -3 -2 -1 -2 -3  2 -1 -1 -2 -1  3 -3 -2 -2  2  7 -1
V  0 -3 -3 -3 -1 -2 -2 -3 -3  3  1 -2  1 -1 -2 -2  0 -3 -1  4
"""


def parse_matrix(text: str) -> Dict[Tuple[str, str], int]:
    """Parse a whitespace separated square matrix with a header row."""
    rows = [line.split() for line in text.strip().splitlines()]
    header = rows[0]
    table = {}
    for row in rows[1:]:
        residue, values = row[0], row[1:]
        if len(values) != len(header):
            raise ValueError(f"row {residue} has {len(values)} values, expected {len(header)}")
        for other, value in zip(header, values):
            table[(residue, other)] = int(value)
    return table


BLOSUM62 = parse_matrix(_BLOSUM62_TEXT)


def blosum62(a: str, b: str) -> float:
    return BLOSUM62.get((a.upper(), b.upper()), UNKNOWN_PAIR_SCORE)


SUBSTITUTION_MATRICES: Dict[str, Callable[[str, str], float]] = {
    "BLOSUM62": blosum62,
}


def get_substitution(name: str) -> Callable[[str, str], float]:
    try:
        return SUBSTITUTION_MATRICES[name.upper()]
    except KeyError as exc:
        raise ValueError(f"unknown substitution matrix: {name!r}") from exc
