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

# --- Constants ---

# Game outcome values used when ranking
WIN_SCORE = 1.0
TIE_SCORE = 0.5
LOSS_SCORE = 0.0

# Standings modes
MODE_INDIVIDUAL = "individual"
MODE_BEST_OF_LEAGUE = "best_of_league"
STANDINGS_MODES = (MODE_INDIVIDUAL, MODE_BEST_OF_LEAGUE)
DEFAULT_MODE = MODE_INDIVIDUAL

# Games per match in best-of-league events
DEFAULT_GAMES_PER_MATCH = 15

# Player status values
STATUS_ACTIVE = "active"
STATUS_WITHDRAWN = "withdrawn"
STATUS_PAUSED = "paused"
PLAYER_STATUSES = (STATUS_ACTIVE, STATUS_WITHDRAWN, STATUS_PAUSED)
INACTIVE_STATUSES = frozenset({STATUS_WITHDRAWN, STATUS_PAUSED})

# Special table markers
TABLE_BYE = "BYE"
TABLE_GIBSON = "GIBSON"

# Name carried by the bye side of a pairing when serialized
BYE_NAME = "BYE"

# Seed used for records that never received one
UNSEEDED = 999

# Pairing notes
NOTE_BYE = "Bye Assignment"
NOTE_FORCED_REMATCH = "Forced Rematch"
NOTE_REMATCH_ALLOWED = "Rematch Allowed"
NOTE_GIBSON = "Gibson Pairing"
NOTE_MANUAL = "Manual Pairing"

# Pairing systems
SYSTEM_SWISS = "swiss"
SYSTEM_ENHANCED_SWISS = "enhanced_swiss"
SYSTEM_KING_OF_THE_HILL = "king_of_the_hill"
SYSTEM_ROUND_ROBIN = "round_robin"
SYSTEM_MANUAL = "manual"
PAIRING_SYSTEMS = (
    SYSTEM_SWISS,
    SYSTEM_ENHANCED_SWISS,
    SYSTEM_KING_OF_THE_HILL,
    SYSTEM_ROUND_ROBIN,
    SYSTEM_MANUAL,
)
DEFAULT_PAIRING_SYSTEM = SYSTEM_SWISS

# Gibson rule and late stage defaults
DEFAULT_PRIZE_COUNT = 3
DEFAULT_LATE_STAGE_ROUNDS = 3
DEFAULT_CONTENDER_SPLIT_MIN_PLAYERS = 4

# Manual pairing name matching
FUZZY_MATCH_FLOOR = 0.60
FUZZY_CONFIRM_THRESHOLD = 0.85
JARO_WINKLER_PREFIX_SCALE = 0.1
JARO_WINKLER_MAX_PREFIX = 4

# Match methods reported by the manual resolver
MATCH_ID = "id"
MATCH_EXACT = "exact"
MATCH_PREFIX = "prefix"
MATCH_SUBSTRING = "substring"
MATCH_FUZZY = "fuzzy"

# Common nicknames expanded before matching a typed name
NAME_ALIASES = {
    "chris": "christopher",
    "mike": "michael",
    "lex": "alexander",
    "ben": "benjamin",
    "dan": "daniel",
    "nathan": "nathaniel",
    "josh": "joshua",
    "matt": "matthew",
    "tim": "timothy",
    "tom": "thomas",
    "dave": "david",
    "will": "william",
    "steve": "steven",
    "jim": "james",
    "rob": "robert",
    "sam": "samuel",
    "alex": "alexander",
}
