"""Pure decoders for the compact fields found in kardex documents."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import Optional

from kardex.errors import MalformedCode

GRADE_STATUS_UNGRADED = "UNGRADED"
GRADE_STATUS_CREDITED = "CREDITED"
GRADE_STATUS_ORDINARY = "ORDINARY"
CREDITED_MARKER = "ACRED"

_PERIOD_CODE_RE = re.compile(r"[0-9]{4}")
_LEADING_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class DecodedPeriod:
    year: int
    cycle: int
    label: str


@dataclass(frozen=True)
class DecodedGrade:
    grade: Optional[int]
    status: str


@dataclass(frozen=True)
class SplitName:
    given_name: str
    paternal_surname: str
    maternal_surname: str


def normalize_text(raw: Optional[str]) -> str:
    """NFC-compose, collapse internal whitespace and trim."""
    composed = unicodedata.normalize("NFC", raw or "")
    return re.sub(r"\s+", " ", composed).strip()


def decode_period_code(code: Optional[str]) -> DecodedPeriod:
    """Decode a ``YYCD`` period code.

    ``YY`` is the year offset from 2000 and ``D`` the cycle. The third digit
    is carried by the source documents but takes no part in the decoding.

    Raises:
        MalformedCode: If the trimmed code is not exactly four ASCII digits.
    """
    text = str(code if code is not None else "").strip()
    if not _PERIOD_CODE_RE.fullmatch(text):
        raise MalformedCode(code)
    year = 2000 + int(text[:2])
    cycle = int(text[3])
    return DecodedPeriod(year=year, cycle=cycle, label=f"{year}-{cycle}")


def decode_grade(code: Optional[str]) -> DecodedGrade:
    text = (code or "").strip().upper()
    if not text:
        return DecodedGrade(grade=None, status=GRADE_STATUS_UNGRADED)
    if CREDITED_MARKER in text:
        return DecodedGrade(grade=None, status=GRADE_STATUS_CREDITED)
    leading = _LEADING_INTEGER_RE.match(text)
    if leading:
        # Trailing text after the digits is dropped: "8.5" grades as 8.
        return DecodedGrade(grade=int(leading.group()), status=GRADE_STATUS_ORDINARY)
    # Anything else (NP, BAJA, ...) is kept verbatim as the status.
    return DecodedGrade(grade=None, status=text)


def split_full_name(full_name: Optional[str]) -> SplitName:
    """Split ``"GIVEN NAMES PATERNAL MATERNAL"`` on its last two tokens.

    Composite surnames are not recognised; they end up partly in the given
    name.
    """
    parts = normalize_text(full_name).split(" ")
    if len(parts) < 2:
        return SplitName(given_name=full_name or "", paternal_surname="", maternal_surname="")
    return SplitName(
        given_name=" ".join(parts[:-2]),
        paternal_surname=parts[-2],
        maternal_surname=parts[-1],
    )


def parse_credits(raw: Optional[str]) -> int:
    """Leading integer of the credit text, or 0 when there is none."""
    leading = _LEADING_INTEGER_RE.match(str(raw if raw is not None else "").strip())
    return int(leading.group()) if leading else 0
