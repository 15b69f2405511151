"""Parser for the search term language.

Terms arrive as a single string of ``field=value`` pairs separated by ``#``::

    name=backend#isPrivate=true#ownerName=ana

Only the first ``=`` of a segment splits key from value, so values may contain
``=``. There is no escape for a literal ``#``. Segments without ``=`` and pairs
with an empty key or value are dropped. Repeated keys stay separate terms.
"""

from dataclasses import dataclass
from typing import List, Optional

from loguru import logger

TERM_SEPARATOR = "#"
KEY_VALUE_SEPARATOR = "="


@dataclass(frozen=True)
class Term:
    """One parsed ``field=value`` condition."""

    field: str
    value: str

    def __post_init__(self):
        if not self.field or not self.field.strip():
            raise ValueError("Term field cannot be empty")
        if not self.value or not self.value.strip():
            raise ValueError("Term value cannot be empty")

    def __str__(self) -> str:
        return f"{self.field}{KEY_VALUE_SEPARATOR}{self.value}"


def parse_terms(raw_terms: Optional[str]) -> List[Term]:
    """Parse a raw term string into terms, preserving input order.

    Args:
        raw_terms: The raw ``key=value#key=value`` string, or None

    Returns:
        Parsed terms; empty when the input is None or blank

    Examples:
        >>> parse_terms("a=1#b=2")
        [Term(field='a', value='1'), Term(field='b', value='2')]
        >>> parse_terms("a=x=y")
        [Term(field='a', value='x=y')]
    """
    if raw_terms is None or not raw_terms.strip():
        return []

    terms: List[Term] = []
    for segment in raw_terms.split(TERM_SEPARATOR):
        segment = segment.strip()
        if not segment:
            continue

        if KEY_VALUE_SEPARATOR not in segment:
            logger.debug(f"Dropping search segment without '=': '{segment}'")
            continue

        key, value = segment.split(KEY_VALUE_SEPARATOR, 1)
        key, value = key.strip(), value.strip()
        if not key or not value:
            logger.debug(f"Dropping search segment with empty key or value: '{segment}'")
            continue

        terms.append(Term(field=key, value=value))

    return terms
