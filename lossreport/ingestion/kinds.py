"""File-kind detection from upload names (e.g. ``RelDesvios_2024-05.csv``)."""

import unicodedata

from lossreport.registry.models import FileKind

# Order matters: first match wins ("AnaliseAcum" must not hit a later rule).
KIND_KEYWORDS: list[tuple[str, FileKind]] = [
    ("reldesvio", FileKind.DEVIATION_REPORT),
    ("desvio", FileKind.DEVIATION_REPORT),
    ("vdistrib", FileKind.DISTRIBUTED_VOLUME),
    ("vcnorma", FileKind.CONSUMED_VOLUME),
    ("perdaneg", FileKind.NEGATIVE_LOSS),
    ("perda_neg", FileKind.NEGATIVE_LOSS),
    ("negativ", FileKind.NEGATIVE_LOSS),
    ("analise", FileKind.ANALYSIS),
]


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).lower()


def detect_kind(filename: str) -> FileKind:
    folded = _fold(filename)
    for keyword, kind in KIND_KEYWORDS:
        if keyword in folded:
            return kind
    return FileKind.GENERIC
