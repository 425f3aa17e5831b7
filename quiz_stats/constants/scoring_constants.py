"""Point values used when ranking correct submissions."""

FIRST_PLACE_POINTS: int = 130
POINTS_DECAY_PER_RANK: int = 2
MINIMUM_POINTS: int = 100
