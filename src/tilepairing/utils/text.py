"""Name matching utilities for resolving typed player references.

This module provides the normalisation and similarity helpers used by the
manual pairing resolver.
"""

# Tile Pairing
# Copyright (C) 2025  Tile Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import re
from typing import Dict, Optional

from tilepairing.constants import (
    JARO_WINKLER_MAX_PREFIX,
    JARO_WINKLER_PREFIX_SCALE,
    NAME_ALIASES,
)

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_SPACES = re.compile(r"\s+")


def normalize_name(name: Optional[str]) -> str:
    """Lowercase, turn anything non-alphanumeric into spaces and collapse them.

    Example:
        >>> normalize_name("  O'Brien_Jr. ")
        'o brien jr'
    """
    if not name:
        return ""
    cleaned = _NON_ALNUM.sub(" ", name.lower())
    return _SPACES.sub(" ", cleaned).strip()


def expand_aliases(name: str, aliases: Optional[Dict[str, str]] = None) -> str:
    """Replace a nickname in the first word of a normalised name."""
    aliases = NAME_ALIASES if aliases is None else aliases
    parts = name.split(" ")
    if parts and parts[0] in aliases:
        parts[0] = aliases[parts[0]]
    return " ".join(parts)


def jaro_winkler(s1: str, s2: str) -> float:
    """Jaro-Winkler similarity of two strings, between 0.0 and 1.0.

    Args:
        s1: First string (already normalised)
        s2: Second string (already normalised)

    Returns:
        The similarity, 1.0 for identical strings
    """
    if not s1 or not s2:
        return 0.0
    if s1 == s2:
        return 1.0

    match_window = max(0, max(len(s1), len(s2)) // 2 - 1)
    s1_matches = [False] * len(s1)
    s2_matches = [False] * len(s2)

    matches = 0
    for i, char in enumerate(s1):
        start = max(0, i - match_window)
        end = min(i + match_window + 1, len(s2))
        for j in range(start, end):
            if s2_matches[j] or s2[j] != char:
                continue
            s1_matches[i] = True
            s2_matches[j] = True
            matches += 1
            break

    if matches == 0:
        return 0.0

    transpositions = 0
    k = 0
    for i, char in enumerate(s1):
        if not s1_matches[i]:
            continue
        while not s2_matches[k]:
            k += 1
        if char != s2[k]:
            transpositions += 1
        k += 1

    m = float(matches)
    jaro = (m / len(s1) + m / len(s2) + (m - transpositions / 2) / m) / 3

    prefix = 0
    for a, b in zip(s1, s2):
        if a != b or prefix == JARO_WINKLER_MAX_PREFIX:
            break
        prefix += 1

    return jaro + prefix * JARO_WINKLER_PREFIX_SCALE * (1 - jaro)
