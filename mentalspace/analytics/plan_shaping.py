"""
Daily plan shaping.

Picks one action per category from the action library by how well each
template's target metrics match today's check-in, then applies the
bad-day reduction when that mode is active.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Collection, Dict, List, Mapping, Optional

from mentalspace.analytics.bad_day_mode import adjust_actions_for_bad_day
from mentalspace.analytics.constants import DEFAULT_THRESHOLDS, AnalyticsThresholds
from mentalspace.analytics.models import BadDayState, CheckIn, PlannedAction

CATEGORIES = ["coping", "lifestyle", "connection"]

DIFFICULTY_EASY = "easy"
DIFFICULTY_MEDIUM = "medium"
DIFFICULTY_HARD = "hard"


@dataclass
class TargetMetric:
    metric: str
    condition: str  # low | high
    threshold: int


@dataclass
class ActionTemplate:
    """Entry of the action library."""
    id: str
    title: str
    category: str
    duration: int
    description: str = ""
    difficulty: str = DIFFICULTY_EASY
    target_metrics: List[TargetMetric] = field(default_factory=list)
    focus_modules: List[str] = field(default_factory=list)
    anchor: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "ActionTemplate":
        return cls(
            id=str(doc.get("actionId") or doc["_id"]),
            title=doc.get("title", ""),
            category=doc.get("category", "coping"),
            duration=int(doc.get("duration", 1) or 1),
            description=doc.get("description", ""),
            difficulty=doc.get("difficulty", DIFFICULTY_EASY),
            target_metrics=[
                TargetMetric(
                    metric=t["metric"],
                    condition=t.get("condition", "low"),
                    threshold=int(t.get("threshold", 0)),
                )
                for t in doc.get("targetMetrics") or []
            ],
            focus_modules=list(doc.get("focusModules") or []),
            anchor=doc.get("anchor"),
        )


def score_action(template: ActionTemplate, checkin: CheckIn) -> int:
    """
    How well a template fits the check-in.

    Each matching target adds twice its distance past the threshold,
    counting the threshold itself as distance 1.
    """
    score = 0
    for target in template.target_metrics:
        value = checkin.metric(target.metric)
        if value is None:
            continue
        if target.condition == "low" and value <= target.threshold:
            score += (target.threshold - value + 1) * 2
        elif target.condition == "high" and value >= target.threshold:
            score += (value - target.threshold + 1) * 2
    return score


def determine_difficulty(checkin: CheckIn) -> str:
    concerning = sum([
        checkin.energy is not None and checkin.energy <= 4,
        checkin.stress is not None and checkin.stress >= 7,
        checkin.mood is not None and checkin.mood <= 4,
    ])
    if concerning >= 2:
        return DIFFICULTY_EASY
    if concerning == 1:
        return DIFFICULTY_MEDIUM
    return DIFFICULTY_HARD


def _prefer(candidates: List[ActionTemplate], keep) -> List[ActionTemplate]:
    # Narrow only when something survives the filter
    narrowed = [c for c in candidates if keep(c)]
    return narrowed or candidates


def select_action_for_category(
    library: List[ActionTemplate],
    category: str,
    checkin: CheckIn,
    recently_used: Collection[str] = (),
    focus_areas: Collection[str] = (),
    difficulty: Optional[str] = None,
) -> Optional[ActionTemplate]:
    """
    Best-scoring template of one category.

    Focus-area matches, the target difficulty and templates not used
    recently are each preferred when any exist. Ties keep library order.
    """
    candidates = [t for t in library if t.category == category]
    if not candidates:
        return None

    if focus_areas:
        candidates = _prefer(candidates, lambda t: any(m in focus_areas for m in t.focus_modules))
    if difficulty:
        candidates = _prefer(candidates, lambda t: t.difficulty == difficulty)
    candidates = _prefer(candidates, lambda t: t.id not in recently_used)

    return max(candidates, key=lambda t: score_action(t, checkin))


def to_planned_action(template: ActionTemplate, plan_date: date, position: int) -> PlannedAction:
    return PlannedAction(
        id=f"{plan_date.isoformat()}-{position}-{template.id}",
        action_id=template.id,
        title=template.title,
        category=template.category,
        duration=template.duration,
        description=template.description,
        anchor=template.anchor,
    )


def select_actions(
    library: List[ActionTemplate],
    checkin: CheckIn,
    recently_used: Collection[str] = (),
    focus_areas: Collection[str] = (),
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> List[ActionTemplate]:
    """One template per category, up to actions_per_plan in total."""
    difficulty = determine_difficulty(checkin)
    selected = []
    for category in CATEGORIES:
        template = select_action_for_category(
            library, category, checkin, recently_used, focus_areas, difficulty
        )
        if template is not None:
            selected.append(template)
    return selected[: thresholds.actions_per_plan]


def shape_daily_plan(
    library: List[ActionTemplate],
    checkin: CheckIn,
    state: BadDayState,
    recently_used: Collection[str] = (),
    focus_areas: Collection[str] = (),
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> List[PlannedAction]:
    """
    Planned actions for the check-in's day.

    Args:
        library: Active action templates
        checkin: The check-in the plan is built from
        state: Bad-day state after today's transition
        recently_used: Action ids used in the last few days

    Returns:
        Three actions normally, one short coping-biased action on a bad day
    """
    templates = select_actions(library, checkin, recently_used, focus_areas, thresholds)
    actions = [to_planned_action(t, checkin.date, i) for i, t in enumerate(templates)]
    return adjust_actions_for_bad_day(actions, state, thresholds)


def plan_summary(actions: List[PlannedAction]) -> Dict[str, int]:
    return {
        "completedCount": sum(1 for a in actions if a.completed),
        "totalCount": len(actions),
    }
