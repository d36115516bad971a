"""Canonical comparison form for guesses and expected answers.

Propositions go through :func:`normalize`; expected answers go through
:func:`normalize_answer`, which also drops release metadata such as
``(feat. X)`` or ``- Remastered 2011``. Both return the same alphabet
(lowercase, no diacritics, no punctuation, single spaces) so their
outputs can be compared with each other, never with raw text.
"""

import re
import unicodedata

_APOSTROPHES = re.compile(r"['’‘`´]")
_PUNCTUATION = re.compile(r"[^\w\s]|_")
_WHITESPACE = re.compile(r"\s+")

_QUALIFIER_WORDS = (
    r"\b(?:remaster(?:ed)?|live|version|edit|mix|mono|stereo|radio|acoustic|demo|bonus|feat|ft|featuring)\b"
)
_BRACKETED = re.compile(
    r"\s*[\(\[\{][^\)\]\}]*" + _QUALIFIER_WORDS + r"[^\)\]\}]*[\)\]\}]", re.IGNORECASE
)
_DASH_QUALIFIER = re.compile(r"\s+[-–—]\s+[^-–—]*" + _QUALIFIER_WORDS + r".*$", re.IGNORECASE)
_FEATURING = re.compile(r"\s+(?:feat\.?|ft\.?|featuring)\s+.*$", re.IGNORECASE)


def normalize(raw: str) -> str:
    """Lowercase, fold diacritics, drop punctuation and squeeze spaces."""
    if not raw:
        return ''
    text = raw.lower()
    text = unicodedata.normalize('NFKD', text)
    text = ''.join(c for c in text if not unicodedata.combining(c))
    text = _APOSTROPHES.sub('', text)
    text = _PUNCTUATION.sub(' ', text)
    return _WHITESPACE.sub(' ', text).strip()


def strip_qualifiers(raw: str) -> str:
    """Remove bracketed qualifiers, dash suffixes and trailing featured credits."""
    text = _BRACKETED.sub('', raw or '')
    text = _DASH_QUALIFIER.sub('', text)
    text = _FEATURING.sub('', text)
    return text.strip()


def normalize_answer(raw: str) -> str:
    """Normalize an expected answer; falls back to :func:`normalize` if stripping empties it."""
    # Credits glued to punctuation ("feat.Bob") only surface once normalized
    stripped = _FEATURING.sub('', normalize(strip_qualifiers(raw)))
    return stripped or normalize(raw)
