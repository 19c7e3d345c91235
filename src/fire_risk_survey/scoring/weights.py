"""Combustibility weighting constants.

Material multipliers turn a surface's tier percentages into a 0-100
"badness" figure.  Surface factors define how wall and roof badness
combine into a single building figure.
"""

# ---------------------------------------------------------------------------
# Material tier multipliers (per percentage point)
# ---------------------------------------------------------------------------
COMBUSTIBLE_MULTIPLIER = 1.0
TRANSITIONAL_MULTIPLIER = 0.5   # approved foam / plastic
NON_COMBUSTIBLE_MULTIPLIER = 0.0

# ---------------------------------------------------------------------------
# Surface factors in the building score
# ---------------------------------------------------------------------------
ROOF_FACTOR = 1.0               # roof-led: roof badness counts in full
WALL_FACTOR_ROOF_LED = 0.4      # walls when the roof has combustible content
WALL_FACTOR_WALL_ONLY = 0.45    # walls when the roof is fully non-combustible

# ---------------------------------------------------------------------------
# Bounds
# ---------------------------------------------------------------------------
COMBUSTIBILITY_MIN = 0.0
COMBUSTIBILITY_MAX = 100.0
SCORE_DECIMALS = 2
PERCENTAGE_TOTAL = 100.0
PERCENTAGE_TOLERANCE = 0.01
