"""
Constants
=========

Process-wide constants used throughout the library: numeric precision,
raw strings, compiled patterns and the validate() defaults. Tables are
read-only views.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Final

# ============================================================================
# Numeric limits
# ============================================================================

MAX_SAFE_INTEGER: Final = 2**53 - 1

# Significant digits kept by sum/avg to hide floating-point artifacts
PRECISION: Final = 12

# ============================================================================
# Raw strings
# ============================================================================

RAW_COMMA: Final = ","
RAW_EMPTY: Final = ""
RAW_WHITESPACE: Final = " "

PATH_SEPARATOR: Final = "."
WILDCARD: Final = "*"

# Locales whose dotted/dotless i do not follow the default case mapping
TURKIC_LOCALES: Final = frozenset({"tr", "az"})

# ============================================================================
# Regular expressions
# ============================================================================

RGX_EMAIL: Final = re.compile(r"^[\w\-.]+@([\w-]+\.)+[\w-]{2,4}$")
RGX_NON_WHITESPACE: Final = re.compile(r"\S+")
RGX_WHITESPACE: Final = re.compile(r"^\s*$")
RGX_PUNCT: Final = re.compile(
    r"[\u2000-\u206F\u2E00-\u2E7F\\'!\"#$%&()*+,\-./:;<=>?@\[\]^_`{|}~]"
)
RGX_PLACEHOLDER: Final = re.compile(r"{(.*?)}")

# ============================================================================
# validate() configuration
# ============================================================================

# Order matters: validate() reports satisfied criteria in this order
VALIDATE_CRITERIA: Final = (
    "minimum",
    "maximum",
    "lowercase",
    "uppercase",
    "special",
    "number",
    "require",
    "disable",
)

VALIDATE_DEFAULTS: Final = MappingProxyType(
    {
        "minimum": 0,
        "maximum": float("inf"),
        "lowercase": 0,
        "uppercase": 0,
        "special": 0,
        "number": 0,
        "require": (),
        "disable": (),
    }
)

__all__ = (
    "MAX_SAFE_INTEGER",
    "PATH_SEPARATOR",
    "PRECISION",
    "RAW_COMMA",
    "RAW_EMPTY",
    "RAW_WHITESPACE",
    "RGX_EMAIL",
    "RGX_NON_WHITESPACE",
    "RGX_PLACEHOLDER",
    "RGX_PUNCT",
    "RGX_WHITESPACE",
    "TURKIC_LOCALES",
    "VALIDATE_CRITERIA",
    "VALIDATE_DEFAULTS",
    "WILDCARD",
)
