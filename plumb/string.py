"""
String helpers
==============

Curried text operations. The optional leading argument (locale, start,
punct, holders) may be left out:

    upper("lorem")           # "LOREM"
    upper("tr", "istanbul")  # "İSTANBUL"
    sub("Lorem")             # "orem"
    sub(0, 1, "Lorem")       # "L"

validate() is a plain function: it reports which strength criteria a text
satisfies.
"""

from __future__ import annotations

import functools
import re
import typing
import unicodedata
from collections.abc import Mapping

from ._helpers import MISSING, or_default
from ._types import Container, Eventual
from .collection import join, map, merge
from .compose import pipe
from .define import (
    RAW_EMPTY,
    RAW_WHITESPACE,
    RGX_NON_WHITESPACE,
    RGX_PLACEHOLDER,
    RGX_PUNCT,
    TURKIC_LOCALES,
    VALIDATE_CRITERIA,
    VALIDATE_DEFAULTS,
)
from .dispatch import Variant, operation
from .path import resolve
from .predicates import is_array, is_string

# ============================================================================
# Case conversion
# ============================================================================


def _is_turkic(locale: typing.Any) -> bool:
    if not is_string(locale):
        return False
    return re.split(r"[-_]", locale, maxsplit=1)[0].lower() in TURKIC_LOCALES


@operation(arity=2, required=1)
def lower(locale: str, text: Eventual[str]) -> typing.Any:
    """Lowercase text. Turkic locales map I to ı and İ to i."""


@lower.text
def _lower(locale: typing.Any, text: str) -> str:
    if _is_turkic(locale):
        text = text.replace("I", "ı").replace("İ", "i")
    return text.lower()


@operation(arity=2, required=1)
def upper(locale: str, text: Eventual[str]) -> typing.Any:
    """Uppercase text. Turkic locales map i to İ and ı to I."""


@upper.text
def _upper(locale: typing.Any, text: str) -> str:
    if _is_turkic(locale):
        text = text.replace("i", "İ").replace("ı", "I")
    return text.upper()


@operation(arity=2, required=1)
def ucfirst(locale: str, text: Eventual[str]) -> typing.Any:
    """Uppercase the first character, leave the rest untouched."""


@ucfirst.text
def _ucfirst(locale: typing.Any, text: str) -> str:
    return _upper(locale, text[:1]) + text[1:]


@operation(arity=2, required=1)
def ucwords(locale: str, text: Eventual[str]) -> typing.Any:
    """
    Capitalize every word; whitespace runs collapse to a single space.

        ucwords("hELLO   world")  # "Hello World"
    """


@ucwords.text
def _ucwords(locale: typing.Any, text: str) -> str:
    return pipe(
        text,
        functools.partial(_lower, locale),
        functools.partial(_words, MISSING),
        map(functools.partial(_ucfirst, locale)),
        join(RAW_WHITESPACE),
    )


# ============================================================================
# Slicing and splitting
# ============================================================================


@operation(arity=3, required=1)
def sub(start: int, end: int, text: Eventual[str]) -> typing.Any:
    """
    Substring between two indices (start defaults to 1, end to the end).

    Indices are clamped to the text and swapped when start > end.
    """


@sub.text
def _sub(start: typing.Any, end: typing.Any, text: str) -> str:
    size = len(text)
    start = min(max(or_default(start, 1), 0), size)
    if not end:
        return text[start:]
    end = min(max(end, 0), size)
    if start > end:
        start, end = end, start
    return text[start:end]


@operation(arity=1)
def remove_punct(text: Eventual[str]) -> typing.Any:
    """Strip ASCII and general/supplemental punctuation."""


@remove_punct.text
def _remove_punct(text: str) -> str:
    return RGX_PUNCT.sub(RAW_EMPTY, text)


@operation(arity=2, required=1)
def words(punct: bool, text: Eventual[str]) -> typing.Any:
    """
    Runs of non-whitespace characters; punctuation is removed first when punct is truthy.

        words(True, "amet, elit.")  # ["amet", "elit"]
    """


@words.text
def _words(punct: typing.Any, text: str) -> list[str]:
    if punct:
        text = _remove_punct(text)
    return RGX_NON_WHITESPACE.findall(text)


# ============================================================================
# Placeholders
# ============================================================================


def _is_holders(value: typing.Any) -> bool:
    return is_array(value) and len(value) == 2 and all(is_string(part) for part in value)


@operation(
    arity=3,
    required=2,
    # supplant(template, (open, close)) still waits for its data
    when=lambda args: not (len(args) == 2 and _is_holders(args[1])),
)
def supplant(template: str, holders: tuple[str, str], data: Eventual[Container[typing.Any]]) -> typing.Any:
    """
    Replace {path} placeholders with values from data.

        supplant("Hi {user.name}", {"user": {"name": "Ada"}})   # "Hi Ada"
        supplant("Hi [name]", ("[", "]"), {"name": "Ada"})      # "Hi Ada"

    Unknown paths and None values are replaced with an empty string.
    """


@supplant.register(Variant.MAPPING, Variant.SEQUENCE)
def _supplant(template: str, holders: typing.Any, data: Container[typing.Any]) -> str:
    if not is_string(template):
        raise TypeError(f"supplant() template must be a string, not {type(template).__name__}")
    if holders is MISSING or holders is None:
        pattern = RGX_PLACEHOLDER
    else:
        opening, closing = holders
        pattern = re.compile(f"{re.escape(opening)}(.*?){re.escape(closing)}")

    def replace(match: re.Match[str]) -> str:
        found = resolve(match.group(1), data)
        return RAW_EMPTY if found is None else str(found)

    return pattern.sub(replace, template)


# ============================================================================
# Strength validation
# ============================================================================

_CATEGORY_PREFIX: typing.Final = {
    "lowercase": "Ll",
    "uppercase": "Lu",
    "special": "P",
    "number": "N",
}


def _category_count(text: str, prefix: str) -> int:
    return len([char for char in text if unicodedata.category(char).startswith(prefix)])


def _contains_any(text: str, phrases: typing.Any) -> bool:
    if not phrases:
        return False
    if is_string(phrases):
        phrases = [phrases]
    lowered = _lower(MISSING, text)
    return any(_lower(MISSING, phrase) in lowered for phrase in phrases)


def validate(text: str, options: Mapping[str, typing.Any] | None = None) -> list[str]:
    """
    Criteria the text satisfies, in a fixed order.

    Options (missing ones take their defaults from VALIDATE_DEFAULTS):
        minimum / maximum                       - bounds on the length
        lowercase / uppercase / special / number - least count of Ll, Lu, P*, N* characters
        require                                  - words of which at least one must appear
        disable                                  - words of which at least one does appear

    Counting criteria left at 0 are never reported; require and disable are
    case-insensitive substring checks.

        validate("Password123!", {"minimum": 8, "lowercase": 2, "special": 2})
        # ["minimum", "maximum", "lowercase"]
    """
    settings: dict[str, typing.Any] = merge(dict(options or {}), dict(VALIDATE_DEFAULTS))
    size = len(text)

    satisfied = {
        "minimum": size >= settings["minimum"],
        "maximum": size <= settings["maximum"],
        "require": _contains_any(text, settings["require"]),
        "disable": _contains_any(text, settings["disable"]),
    }
    for criterion, prefix in _CATEGORY_PREFIX.items():
        least = settings[criterion]
        satisfied[criterion] = least > 0 and _category_count(text, prefix) >= least

    return [criterion for criterion in VALIDATE_CRITERIA if satisfied[criterion]]


__all__ = (
    "lower",
    "remove_punct",
    "sub",
    "supplant",
    "ucfirst",
    "ucwords",
    "upper",
    "validate",
    "words",
)
