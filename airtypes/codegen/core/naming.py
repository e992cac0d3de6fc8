"""
Naming utilities for safe code generation.

Turns arbitrary display names (spaces, punctuation, accents, leading
digits) into identifiers that are valid in the target language and unique
within one generation scope.
"""

import re
import unicodedata
from typing import List, Optional, Pattern, Sequence, Set, Tuple

from ...logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_IDENTIFIER = "invalidIdentifier"

# Identifier grammar shared by JavaScript-family targets
DEFAULT_IDENTIFIER_PATTERN = re.compile(r"^[$A-Z_a-z][\w$]*$", re.ASCII)

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
_CASE_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")
_NON_WORD = re.compile(r"[^\w\s]+")
_WHITESPACE = re.compile(r"\s+")
_NUMERIC = re.compile(r"^[0-9]+$")
_VALID_START = re.compile(r"[$A-Za-z]")
_INVALID_CHARS = re.compile(r"[^A-Za-z0-9_$]")


def strip_diacritics(value: str) -> str:
    """Decompose ``value`` and drop combining marks."""
    return _COMBINING_MARKS.sub("", unicodedata.normalize("NFD", value))


def to_words(value: str) -> List[str]:
    """Split a display name into ASCII words on case and symbol boundaries."""
    spaced = _CASE_BOUNDARY.sub(r"\1 \2", strip_diacritics(value))
    spaced = _NON_ALNUM.sub(" ", spaced).strip()
    if not spaced:
        return []
    return spaced.split()


def capitalize(word: str) -> str:
    if not word:
        return ""
    return word[0].upper() + word[1:].lower()


def to_camel_case(value: str) -> str:
    """Convert to camelCase."""
    words = to_words(value)
    if not words:
        return ""
    return words[0].lower() + "".join(capitalize(w) for w in words[1:])


def to_pascal_case(value: str) -> str:
    """Convert to PascalCase."""
    return "".join(capitalize(w) for w in to_words(value))


class IdentifierScope:
    """
    One generation scope: the set of identifiers already handed out plus
    the counter for fallback names.

    Create a fresh scope for every table; scopes are never shared.
    """

    def __init__(
        self,
        reserved_words: Optional[Set[str]] = None,
        identifier_pattern: Pattern[str] = DEFAULT_IDENTIFIER_PATTERN,
        default_identifier: str = DEFAULT_IDENTIFIER,
    ):
        """
        Initialize an empty scope.

        Args:
            reserved_words: Words that may not be used as identifiers
            identifier_pattern: Regex a syntactically valid identifier matches
            default_identifier: Prefix for numbered fallback names
        """
        self.reserved_words = reserved_words or set()
        self.identifier_pattern = identifier_pattern
        self.default_identifier = default_identifier
        self._used_names: Set[str] = set()
        self._fallback_count = 0

    def is_valid(self, value: str) -> bool:
        """Check syntax and reserved words."""
        return bool(self.identifier_pattern.match(value)) and (
            value not in self.reserved_words
        )

    def identifier(self, name: str, suffixes: Sequence[str] = ()) -> str:
        """
        Produce a valid identifier for ``name`` that is unique in this scope.

        Each entry of ``suffixes`` names a derived declaration
        (``identifier + suffix``); the result is chosen so that those are
        free as well, and all of them are registered.

        Args:
            name: Arbitrary display name
            suffixes: Suffixes of names derived from the identifier

        Returns:
            Identifier registered as used in this scope
        """
        candidate, reason = self._sanitize(name)
        if candidate is None:
            candidate = self._fallback(name, reason, suffixes)

        family = ("", *suffixes)
        final_name = candidate
        counter = 2
        while self._taken(final_name, family):
            final_name = f"{candidate}{counter}"
            counter += 1

        self._used_names.update(f"{final_name}{suffix}" for suffix in family)
        return final_name

    def _taken(self, name: str, family: Sequence[str]) -> bool:
        return any(f"{name}{suffix}" in self._used_names for suffix in family)

    def _sanitize(self, name: str) -> Tuple[Optional[str], str]:
        """Return ``(identifier, "")`` or ``(None, reason)`` when salvage fails."""
        trimmed = strip_diacritics(name).strip()
        if self.is_valid(trimmed):
            return trimmed, ""

        sanitized = _NON_WORD.sub(" ", trimmed)
        sanitized = _WHITESPACE.sub(" ", sanitized).strip()

        if _NUMERIC.match(sanitized):
            return None, f'became purely numeric after sanitization ("{sanitized}")'

        pascal = to_pascal_case(sanitized)
        if pascal[:1].isdigit():
            pascal = f"_{pascal}"

        if self.is_valid(pascal):
            return pascal, ""

        match = _VALID_START.search(pascal)
        if match is None:
            return None, "contains no valid starting character after sanitization"

        salvaged = _INVALID_CHARS.sub("_", pascal[match.start():])
        salvaged = to_pascal_case(re.sub(r"_+", "_", salvaged))
        if not salvaged or not self.is_valid(salvaged):
            return None, "could not be salvaged"

        return salvaged, ""

    def _fallback(self, name: str, reason: str, suffixes: Sequence[str] = ()) -> str:
        """Pick the next numbered default identifier that is still free."""
        family = ("", *suffixes)
        self._fallback_count += 1
        fallback = f"{self.default_identifier}{self._fallback_count}"
        while self._taken(fallback, family):
            self._fallback_count += 1
            fallback = f"{self.default_identifier}{self._fallback_count}"

        logger.warning(
            f'Invalid identifier "{name}" {reason}. '
            f'Using default identifier "{fallback}".'
        )
        return fallback
