"""Fixed scales, timer durations and defaults for a sizing round."""

from typing import Dict, List

# -------------------- SCALES --------------------
SCALES: Dict[str, Dict] = {
    "fibonacci": {
        "title": "Fibonacci",
        "labels": ["1", "2", "3", "5", "8", "13", "21"],
        "values": {"1": 1, "2": 2, "3": 3, "5": 5, "8": 8, "13": 13, "21": 21},
    },
    "points": {
        "title": "Story Points",
        "labels": ["1", "2", "4", "8", "16", "32"],
        "values": {"1": 1, "2": 2, "4": 4, "8": 8, "16": 16, "32": 32},
    },
}
DEFAULT_SCALE = "fibonacci"

# -------------------- TIMER --------------------
TIMER_DURATIONS: Dict[int, str] = {
    60: "1 minute",
    120: "2 minutes",
    180: "3 minutes",
    300: "5 minutes",
}
DEFAULT_DURATION = 180
TICK_SECONDS = 1

# -------------------- ROSTER --------------------
MAX_MEMBERS = 10
DEFAULT_CONFIDENCE = 3
CONFIDENCE_LEVELS: List[str] = [
    "Very Uncertain",
    "Somewhat Uncertain",
    "Neutral",
    "Somewhat Confident",
    "Very Confident",
]

# -------------------- LOGGING --------------------
LOG_DIR = "logs"
LOG_FILE = "team_sizing.log"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3

BAR_COLOR = "#4f46e5"


def confidence_label(level: int) -> str:
    level = min(max(int(level), 1), len(CONFIDENCE_LEVELS))
    return CONFIDENCE_LEVELS[level - 1]
