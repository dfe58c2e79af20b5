"""Squad Analytics: shared constants.

Single source of truth for scoring weights, sample thresholds and chart defaults.
"""

# ── Match points ────────────────────────────────────────────────────────
POINTS_PER_WIN = 3
POINTS_PER_DRAW = 1
MAX_POINTS_PER_MATCH = POINTS_PER_WIN

# ── Pair synergy ────────────────────────────────────────────────────────
PAIR_MIN_MATCHES = 3           # Matches in the input set before any pair is reported
PAIR_MIN_SHARED_MATCHES = 2    # Pairs need strictly more shared matches than this
IMPACT_WEIGHT_POINTS = 1.5
IMPACT_WEIGHT_GOALS = 1.0
IMPACT_WEIGHT_ASSISTS = 0.75
MATRIX_PLAYER_LIMIT = 12
IMPACT_TIE_TOLERANCE = 0.001

# ── Leaderboards ────────────────────────────────────────────────────────
LEADERBOARD_SIZE = 10

# ── Progression ─────────────────────────────────────────────────────────
XP_PER_MATCH = 10
XP_PER_GOAL = 5
XP_PER_ASSIST = 3
LEVEL_BASE_COST = 100
LEVEL_COST_GROWTH = 1.2

# ── Radar geometry ──────────────────────────────────────────────────────
RADAR_DEFAULT_RADIUS = 1.0
RADAR_DEFAULT_LEVELS = 5
RADAR_MIN_AXIS_MAX = 1.0
RADAR_MIN_AXES = 2

# ── Heatmap bounds ──────────────────────────────────────────────────────
HEATMAP_SCORE_FLOOR = -1.0
HEATMAP_SCORE_CEILING = 1.0
