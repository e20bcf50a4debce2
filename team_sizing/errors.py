"""
Error types raised by the sizing session.
"""

from typing import Optional


class SizingError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class TopicRequiredError(SizingError):
    def __init__(self, message: str = "Please enter a topic for the sizing round"):
        super().__init__("topic_required", message)


class UnknownScaleError(SizingError):
    def __init__(self, name: str):
        super().__init__("unknown_scale", f"Unknown scale '{name}'", {"scale": name})
