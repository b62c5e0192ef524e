"""
Value objects for the check-in analytics core.

Documents come out of MongoDB as camelCase dicts; the from_document
constructors are the only place that knows about that shape.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, List, Dict, Any, Mapping, Union

from mentalspace.analytics.constants import METRIC_KEYS, TREND_STABLE

DayLike = Union[date, datetime, str]


def parse_day(value: DayLike) -> date:
    """Normalize a date, datetime or ISO string to a calendar day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _metric_value(raw: Any) -> Optional[int]:
    # bool is an int subclass; it is never a metric
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return None
    return int(raw)


@dataclass
class CheckIn:
    """One daily self-reported metric snapshot."""
    date: date
    mood: Optional[int] = None
    stress: Optional[int] = None
    sleep: Optional[int] = None
    energy: Optional[int] = None
    focus: Optional[int] = None
    anxiety: Optional[int] = None
    journal_entry: Optional[str] = None
    crisis_detected: bool = False
    crisis_handled: bool = False
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "CheckIn":
        metrics = doc.get("metrics") or doc
        return cls(
            date=parse_day(doc["date"]),
            journal_entry=doc.get("journalEntry"),
            crisis_detected=bool(doc.get("crisisDetected", False)),
            crisis_handled=bool(doc.get("crisisHandled", False)),
            id=str(doc["_id"]) if doc.get("_id") is not None else None,
            created_at=doc.get("createdAt"),
            **{key: _metric_value(metrics.get(key)) for key in METRIC_KEYS},
        )

    def metric(self, name: str) -> Optional[int]:
        return getattr(self, name, None)

    def metrics(self) -> Dict[str, Optional[int]]:
        return {key: self.metric(key) for key in METRIC_KEYS}


@dataclass
class PlannedAction:
    id: str
    action_id: str
    title: str
    category: str
    duration: int
    description: str = ""
    completed: bool = False
    skipped: bool = False
    simplified: bool = False
    anchor: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "PlannedAction":
        return cls(
            id=str(doc.get("id") or doc.get("actionId")),
            action_id=str(doc.get("actionId") or doc.get("id")),
            title=doc.get("title", ""),
            category=doc.get("category", "coping"),
            duration=int(doc.get("duration", 0) or 0),
            description=doc.get("description", ""),
            completed=bool(doc.get("completed", False)),
            skipped=bool(doc.get("skipped", False)),
            simplified=bool(doc.get("simplified", False)),
            anchor=doc.get("anchor"),
        )

    def to_document(self) -> Dict[str, Any]:
        doc = {
            "id": self.id,
            "actionId": self.action_id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "duration": self.duration,
            "completed": self.completed,
            "skipped": self.skipped,
            "simplified": self.simplified,
        }
        if self.anchor:
            doc["anchor"] = self.anchor
        return doc


@dataclass
class DailyPlan:
    date: date
    actions: List[PlannedAction] = field(default_factory=list)
    checkin_id: Optional[str] = None
    stored_completed_count: Optional[int] = None
    stored_total_count: Optional[int] = None

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "DailyPlan":
        return cls(
            date=parse_day(doc["date"]),
            actions=[PlannedAction.from_document(a) for a in doc.get("actions") or []],
            checkin_id=str(doc["checkinId"]) if doc.get("checkinId") else None,
            stored_completed_count=doc.get("completedCount"),
            stored_total_count=doc.get("totalCount"),
        )

    @property
    def completed_count(self) -> int:
        if self.stored_completed_count is not None:
            return int(self.stored_completed_count)
        return sum(1 for action in self.actions if action.completed)

    @property
    def total_count(self) -> int:
        if self.stored_total_count is not None:
            return int(self.stored_total_count)
        return len(self.actions)


@dataclass
class TriggerDate:
    """User-declared date of personal significance."""
    date: date
    label: str
    repeat_annually: bool = False
    id: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "TriggerDate":
        return cls(
            date=parse_day(doc["date"]),
            label=doc.get("label", ""),
            repeat_annually=bool(doc.get("repeatAnnually", False)),
            id=str(doc["_id"]) if doc.get("_id") is not None else None,
        )


@dataclass
class MetricTrend:
    average: float = 0
    min: int = 0
    max: int = 0
    trend: str = TREND_STABLE
    values: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "average": self.average,
            "min": self.min,
            "max": self.max,
            "trend": self.trend,
            "values": list(self.values),
        }


@dataclass
class DayOfWeekPattern:
    weekday: int  # ISO weekday, Monday=1
    day_name: str
    average_mood: float
    average_stress: Optional[float]
    checkin_count: int
    is_harder: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weekday": self.weekday,
            "dayName": self.day_name,
            "averageMood": self.average_mood,
            "averageStress": self.average_stress,
            "checkinCount": self.checkin_count,
            "isHarder": self.is_harder,
        }


@dataclass
class TriggerPattern:
    type: str  # day_of_week | consecutive_low | stress_spike
    description: str
    severity: str
    occurrences: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    affected_days: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "description": self.description,
            "severity": self.severity,
            "occurrences": self.occurrences,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
            "affectedDays": list(self.affected_days),
        }


@dataclass
class MoodPrediction:
    target_date: date
    predicted_mood: float
    confidence: str
    confidence_score: float
    reasoning: str
    based_on_day_of_week: bool = False
    based_on_recent_trend: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "targetDate": self.target_date.isoformat(),
            "predictedMood": self.predicted_mood,
            "confidence": self.confidence,
            "confidenceScore": self.confidence_score,
            "reasoning": self.reasoning,
            "basedOnDayOfWeek": self.based_on_day_of_week,
            "basedOnRecentTrend": self.based_on_recent_trend,
        }


@dataclass
class CrisisAssessment:
    """Advisory crisis classification for a check-in."""
    severity: str
    reason: str
    indicators: List[str] = field(default_factory=list)
    trigger_type: str = "metrics"  # metrics | keyword | low_mood_pattern

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity,
            "reason": self.reason,
            "indicators": list(self.indicators),
            "triggerType": self.trigger_type,
        }


@dataclass
class ProactiveAlert:
    type: str  # trigger_approaching | recovery_mode | tomorrow_hard | pattern_detected
    title: str
    message: str
    severity: str  # info | warning | critical
    actionable: bool
    suggested_action: Optional[str] = None
    trigger_date: Optional[date] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "title": self.title,
            "message": self.message,
            "severity": self.severity,
            "actionable": self.actionable,
            "suggestedAction": self.suggested_action,
            "triggerDate": self.trigger_date.isoformat() if self.trigger_date else None,
        }


@dataclass
class BadDayTrigger:
    type: str  # low_mood | sos_used | missed_actions | trigger_date | manual
    description: str
    timestamp: datetime

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "BadDayTrigger":
        timestamp = doc["timestamp"]
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp)
        return cls(type=doc["type"], description=doc.get("description", ""), timestamp=timestamp)

    def to_document(self) -> Dict[str, Any]:
        return {"type": self.type, "description": self.description, "timestamp": self.timestamp}


@dataclass
class BadDayState:
    """
    Per-user bad-day mode record.

    At most one activation window is open at a time; re-triggering while
    active only appends trigger records.
    """
    active: bool = False
    activated_date: Optional[date] = None
    activated_at: Optional[datetime] = None
    deactivated_at: Optional[datetime] = None
    triggers: List[BadDayTrigger] = field(default_factory=list)

    @classmethod
    def from_document(cls, doc: Optional[Mapping[str, Any]]) -> "BadDayState":
        if not doc:
            return cls()
        activated_date = doc.get("activatedDate")
        return cls(
            active=bool(doc.get("active", False)),
            activated_date=parse_day(activated_date) if activated_date else None,
            activated_at=doc.get("activatedAt"),
            deactivated_at=doc.get("deactivatedAt"),
            triggers=[BadDayTrigger.from_document(t) for t in doc.get("triggers") or []],
        )

    def to_document(self) -> Dict[str, Any]:
        return {
            "active": self.active,
            "activatedDate": self.activated_date.isoformat() if self.activated_date else None,
            "activatedAt": self.activated_at,
            "deactivatedAt": self.deactivated_at,
            "triggers": [t.to_document() for t in self.triggers],
        }


@dataclass
class BadDayEvents:
    """Everything the bad-day state machine needs to know about today."""
    now: datetime
    checkin_mood: Optional[int] = None
    checkin_at: Optional[datetime] = None
    sos_used_at: Optional[datetime] = None
    missed_actions: int = 0
    trigger_date_label: Optional[str] = None
    manual: Optional[str] = None  # "activate" | "deactivate"

    @property
    def today(self) -> date:
        return self.now.date()


@dataclass
class StreakInfo:
    current_checkin_streak: int = 0
    longest_checkin_streak: int = 0
    current_completion_streak: int = 0
    longest_completion_streak: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "currentCheckinStreak": self.current_checkin_streak,
            "longestCheckinStreak": self.longest_checkin_streak,
            "currentCompletionStreak": self.current_completion_streak,
            "longestCompletionStreak": self.longest_completion_streak,
        }


@dataclass
class ActionSummary:
    action_id: str
    title: str
    category: str
    completed_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "actionId": self.action_id,
            "title": self.title,
            "category": self.category,
            "completedCount": self.completed_count,
        }


@dataclass
class WeeklySummary:
    """Immutable once-per-week aggregate report."""
    week_start: date
    week_end: date
    metrics: Dict[str, MetricTrend]
    completion_rate: int
    streaks: StreakInfo
    insights: List[str]
    top_actions: List[ActionSummary]

    def to_document(self) -> Dict[str, Any]:
        return {
            "weekStart": self.week_start.isoformat(),
            "weekEnd": self.week_end.isoformat(),
            "metrics": {key: trend.to_dict() for key, trend in self.metrics.items()},
            "completionRate": self.completion_rate,
            "streaks": self.streaks.to_dict(),
            "insights": list(self.insights),
            "topActions": [a.to_dict() for a in self.top_actions],
        }
