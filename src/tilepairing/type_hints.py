"""Type hints used in Tile Pairing."""

from typing import Dict, FrozenSet, Literal, Set, Tuple, Union

# Canonical player identity, fixed when records enter the library
PlayerId = str

# Standings mode literals
StandingsMode = Literal["individual", "best_of_league"]

# Player status literals
PlayerStatus = Literal["active", "withdrawn", "paused"]

# A table is a positive number, or one of the special markers
TableMarker = Literal["BYE", "GIBSON"]
Table = Union[int, TableMarker]

# Unordered pair of player ids that have already met
MatchupKey = FrozenSet[PlayerId]
Matchups = Set[MatchupKey]

# Player id -> reserved table number
ReservedTables = Dict[PlayerId, int]

# One round of pairings, immutable once returned
PairingSet = Tuple["Pairing", ...]
# Round number -> pairings of that round
Schedule = Dict[int, PairingSet]

#  LocalWords:  MatchupKey PairingSet
