"""Exceptions for use in Tile Pairing"""

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

from typing import Sequence


# ========== Base Application Exception ==========


class TilePairingException(Exception):
    """Base exception for all Tile Pairing errors.

    All custom exceptions in the library inherit from this class.
    This enables catching all library-specific errors with a single except clause.
    """

    pass


# ========== Pairing Exceptions ==========


class PairingException(TilePairingException):
    """Base exception for pairing-related errors."""

    pass


class InvalidPairingException(PairingException):
    """Raised when a requested pairing is invalid (e.g. a player against itself)."""

    pass


class NoPairingAvailableException(PairingException):
    """Raised when no valid pairing can be generated."""

    pass


class AlreadyPairedException(PairingException):
    """Raised when a player already has a pairing in the round."""

    def __init__(self, player_name: str, table) -> None:
        super().__init__(f"{player_name} is already paired this round (table {table})")
        self.player_name = player_name
        self.table = table


# ========== Roster Exceptions ==========


class RosterException(TilePairingException):
    """Base exception for roster-related errors."""

    pass


class InvalidRosterException(RosterException):
    """Raised when a roster cannot be paired (empty, or corrupt)."""

    pass


class DuplicatePlayerException(InvalidRosterException):
    """Raised when the same player id appears twice in a roster."""

    pass


# ========== Player Exceptions ==========


class PlayerException(TilePairingException):
    """Base exception for player-related errors."""

    pass


class PlayerNotFoundException(PlayerException):
    """Raised when a requested player cannot be found."""

    pass


class AmbiguousPlayerReferenceException(PlayerException):
    """Raised when a free-text reference matches more than one player.

    The candidates are kept on the exception so the caller can ask the
    operator to disambiguate.
    """

    def __init__(self, reference: str, candidates: Sequence) -> None:
        names = ", ".join(c.name for c in candidates)
        super().__init__(f"'{reference}' matches several players: {names}")
        self.reference = reference
        self.candidates = tuple(candidates)


class InvalidPlayerDataException(PlayerException):
    """Raised when player data is invalid or incomplete."""

    pass


# ========== Result Exceptions ==========


class ResultException(TilePairingException):
    """Base exception for result errors."""

    pass


class InvalidResultException(ResultException):
    """Raised when a result record is invalid (e.g. both sides start)."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(TilePairingException):
    """Base exception for configuration errors."""

    pass


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass
