"""Type hints used in Swiss Pairing."""

from typing import Literal, Tuple, Union

# Chess color string constants (for runtime use)
WHITE = "White"
BLACK = "Black"

# Basically, white or black
Colour = Literal["White", "Black"]

# Players are keyed by the id the persistence layer hands us
PlayerId = Union[int, str]

# Unordered pair of player ids that have met
MatchKey = frozenset

# (white id, black id) of one board
PairingIDs = Tuple[PlayerId, PlayerId]

#  LocalWords:  PairingIDs
