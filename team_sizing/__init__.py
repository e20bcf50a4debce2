"""
team-sizing: planning-poker style workload sizing for one team.

Session state, countdown timer, statistics, chart shaping and exports
behind the Streamlit page in TeamSizing.py.
"""

from .errors import SizingError, TopicRequiredError, UnknownScaleError
from .session import Draft, Estimate, Scale, SizingSession, get_scale
from .stats import calculate_stats
from .timer import CountdownTimer, TimerState, format_time

__version__ = "0.1.0"
__all__ = [
    "SizingSession",
    "Estimate",
    "Draft",
    "Scale",
    "get_scale",
    "CountdownTimer",
    "TimerState",
    "format_time",
    "calculate_stats",
    "SizingError",
    "TopicRequiredError",
    "UnknownScaleError",
]
