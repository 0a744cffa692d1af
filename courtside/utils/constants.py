"""
Constants for the Courtside game tracker.

Sport defaults mirror the league settings a league administrator gets when
creating a league; every value can be overridden per league.
"""

# Application metadata
APP_TITLE = "Courtside Stat Tracker"

# Clock
TICK_INTERVAL_SECONDS = 1.0
MAX_CLOCK_MINUTES = 99
MAX_CLOCK_SECONDS = MAX_CLOCK_MINUTES * 60 + 59
OVERTIME_PREFIX = "OT"

# Period labels per period type
PERIOD_LABELS = {
    "halves": ["H1", "H2"],
    "quarters": ["Q1", "Q2", "Q3", "Q4"],
    "periods": ["P1", "P2", "P3"],
}

DEFAULT_SPORT = "basketball"
DEFAULT_STARTERS_COUNT = 5

# Number of simultaneously active players per sport
STARTERS_BY_SPORT = {
    "basketball": 5,
    "soccer": 11,
    "football": 11,
    "americanFootball": 11,
    "baseball": 9,
    "hockey": 6,
}

DEFAULT_PERIOD_TYPE = {
    "basketball": "halves",
    "hockey": "periods",
}

DEFAULT_PERIOD_MINUTES = {
    "basketball": 24,
    "hockey": 20,
}
FALLBACK_PERIOD_MINUTES = 45

DEFAULT_OVERTIME_MINUTES = {
    "soccer": 15,
}
FALLBACK_OVERTIME_MINUTES = 5

SCORING_RULES_BY_SPORT = {
    "basketball": {"twoPointFGM": 2, "threePointFGM": 3, "freeThrowM": 1},
    "hockey": {"goal": 1},
    "soccer": {"goal": 1},
    "baseball": {"single": 1, "double": 2, "triple": 3, "homeRun": 4},
    "football": {
        "touchdown": 6,
        "fieldGoal": 3,
        "extraPoint": 1,
        "twoPointConversion": 2,
        "safety": 2,
    },
}

STAT_TYPES_BY_SPORT = {
    "basketball": [
        "twoPointFGM", "twoPointFGA", "threePointFGM", "threePointFGA",
        "freeThrowM", "freeThrowA", "offensiveRebound", "defensiveRebound",
        "assist", "steal", "turnover", "block", "blockedShotAttempt",
        "personalFoul", "drawnFoul", "teamFoul", "technicalFoul", "flagrantFoul",
    ],
    "hockey": [
        "goal", "assist", "shot", "hit", "blockedShot", "faceoffWon",
        "faceoffLost", "penaltyMinute", "takeaway", "giveaway",
    ],
    "soccer": [
        "goal", "assist", "shotOnTarget", "shotOffTarget", "save",
        "foulCommitted", "yellowCard", "redCard", "offside", "corner",
    ],
    "baseball": [
        "single", "double", "triple", "homeRun", "run", "rbi", "walk",
        "strikeout", "stolenBase", "caughtStealing", "fieldingError",
    ],
    "football": [
        "touchdown", "fieldGoal", "extraPoint", "twoPointConversion", "safety",
        "tackle", "sack", "interceptionCaught", "fumbleLost",
    ],
}

FOUL_STAT_TYPES_BY_SPORT = {
    "basketball": ["personalFoul", "technicalFoul", "flagrantFoul"],
}

FOUL_OUT_LIMIT_BY_SPORT = {
    "basketball": 5,
}

REBOUND_STAT_TYPES = ("offensiveRebound", "defensiveRebound")

# Shot events may carry a court location (feet, basketball full court)
SHOT_STAT_TYPES = (
    "twoPointFGM", "twoPointFGA", "threePointFGM", "threePointFGA",
)
COURT_DIMENSIONS = {
    "basketball": (94.0, 50.0),
}

# Display labels used in play-by-play lines and messages
STAT_LABELS = {
    "twoPointFGM": "2PT FG",
    "twoPointFGA": "2PT FG Attempt",
    "threePointFGM": "3PT FG",
    "threePointFGA": "3PT FG Attempt",
    "freeThrowM": "FT Made",
    "freeThrowA": "FT Attempt",
    "offensiveRebound": "Off Reb",
    "defensiveRebound": "Def Reb",
    "assist": "Assist",
    "steal": "Steal",
    "turnover": "Turnover",
    "block": "Block",
    "blockedShotAttempt": "Blocked Shot",
    "personalFoul": "Foul",
    "drawnFoul": "Foul Drawn",
    "teamFoul": "Team Foul",
    "technicalFoul": "Tech Foul",
    "flagrantFoul": "Flag Foul",
    "goal": "Goal",
    "shot": "Shot",
    "save": "Save",
    "touchdown": "Touchdown",
    "fieldGoal": "Field Goal",
    "homeRun": "Home Run",
}
