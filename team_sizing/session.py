"""
Session state for one sizing round.

A SizingSession owns the topic, the active scale, the draft input fields,
the submitted estimates and the countdown timer. The UI keeps one instance
per browser session and passes it to every handler.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import (
    DEFAULT_CONFIDENCE,
    DEFAULT_DURATION,
    DEFAULT_SCALE,
    MAX_MEMBERS,
    SCALES,
)
from .chart import chart_data as shape_chart_data
from .errors import TopicRequiredError, UnknownScaleError
from .stats import calculate_stats
from .timer import CountdownTimer

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scale:
    name: str
    title: str
    labels: List[str]
    values: Dict[str, int]

    def value_of(self, label: str) -> int:
        return self.values[label]


def get_scale(name: str) -> Scale:
    if name not in SCALES:
        raise UnknownScaleError(name)
    entry = SCALES[name]
    return Scale(name=name, title=entry["title"], labels=list(entry["labels"]), values=dict(entry["values"]))


@dataclass(frozen=True)
class Estimate:
    name: str
    size: str
    size_value: int
    confidence: int = DEFAULT_CONFIDENCE
    comment: str = ""

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "size": self.size,
            "sizeValue": self.size_value,
            "comment": self.comment,
            "confidence": self.confidence,
        }


@dataclass
class Draft:
    name: str = ""
    size: str = ""
    comment: str = ""
    confidence: int = DEFAULT_CONFIDENCE

    def clear(self) -> None:
        self.name = ""
        self.size = ""
        self.comment = ""
        self.confidence = DEFAULT_CONFIDENCE


@dataclass
class SizingSession:
    scale: Scale = field(default_factory=lambda: get_scale(DEFAULT_SCALE))
    topic: str = ""
    estimates: List[Estimate] = field(default_factory=list)
    revealed: bool = False
    show_chart: bool = False
    draft: Draft = field(default_factory=Draft)
    timer: CountdownTimer = field(default_factory=lambda: CountdownTimer(DEFAULT_DURATION))

    def __post_init__(self):
        self.timer.on_expire = self._on_timer_expired

    # ---- read helpers ----
    @property
    def member_count(self) -> int:
        return len(self.estimates)

    @property
    def is_full(self) -> bool:
        return len(self.estimates) >= MAX_MEMBERS

    @property
    def scale_locked(self) -> bool:
        return bool(self.estimates)

    @property
    def topic_locked(self) -> bool:
        return bool(self.estimates) or self.timer.active

    @property
    def can_start_timer(self) -> bool:
        return self.timer.idle and not self.revealed and bool(self.topic.strip())

    def values(self) -> List[int]:
        return [e.size_value for e in self.estimates]

    def statistics(self) -> Dict:
        return calculate_stats(self.values())

    def chart_data(self) -> List[Dict]:
        return shape_chart_data(self.estimates)

    # ---- mutations ----
    def set_topic(self, text: str) -> bool:
        if self.topic_locked:
            log.debug("Topic change rejected: round already in progress")
            return False
        self.topic = text
        return True

    def select_scale(self, name: str) -> bool:
        if self.scale_locked:
            log.debug("Scale change to %s rejected: estimates already submitted", name)
            return False
        self.scale = get_scale(name)
        if self.draft.size and self.draft.size not in self.scale.values:
            self.draft.size = ""
        log.info("Scale set to %s", name)
        return True

    def set_duration(self, seconds: int) -> bool:
        return self.timer.set_duration(seconds)

    def submit_estimate(
        self,
        name: str,
        size: str,
        comment: str = "",
        confidence: int = DEFAULT_CONFIDENCE,
    ) -> Optional[Estimate]:
        """Append an estimate, or return None and leave the roster untouched."""
        name = (name or "").strip()
        if not name or not size:
            log.debug("Submission rejected: name and size are required")
            return None
        if self.is_full:
            log.debug("Submission rejected: roster is full (%s)", MAX_MEMBERS)
            return None
        if size not in self.scale.values:
            log.debug("Submission rejected: %r is not on the %s scale", size, self.scale.name)
            return None
        if not 1 <= int(confidence) <= 5:
            log.debug("Submission rejected: confidence %s out of range", confidence)
            return None

        estimate = Estimate(
            name=name,
            size=size,
            size_value=self.scale.value_of(size),
            confidence=int(confidence),
            comment=comment or "",
        )
        self.estimates.append(estimate)
        self.draft.clear()
        log.info("Estimate %s/%s submitted by %s", self.member_count, MAX_MEMBERS, name)
        return estimate

    def submit_draft(self) -> Optional[Estimate]:
        d = self.draft
        return self.submit_estimate(d.name, d.size, d.comment, d.confidence)

    def toggle_reveal(self) -> bool:
        if not self.estimates:
            log.debug("Reveal rejected: no estimates")
            return False
        self.revealed = not self.revealed
        log.info("Estimates %s", "revealed" if self.revealed else "hidden")
        return True

    def toggle_chart(self) -> bool:
        if not (self.revealed and self.estimates):
            return False
        self.show_chart = not self.show_chart
        return True

    def start_timer(self) -> bool:
        if not self.topic.strip():
            raise TopicRequiredError()
        if self.revealed:
            log.debug("Timer start rejected: estimates already revealed")
            return False
        return self.timer.start()

    def tick(self) -> None:
        self.timer.tick()

    def catch_up(self, now: Optional[float] = None) -> int:
        return self.timer.catch_up(now)

    def reset(self) -> None:
        """Start a fresh round, keeping the selected scale and timer duration."""
        self.estimates = []
        self.topic = ""
        self.draft.clear()
        self.revealed = False
        self.show_chart = False
        self.timer.reset()
        log.info("Session reset")

    def _on_timer_expired(self) -> None:
        self.revealed = True
