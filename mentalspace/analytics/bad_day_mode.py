"""
Bad-day mode state machine.

The state is an explicit BadDayState record: transition() takes the
current state plus today's events and returns the next state without
touching the input. Evaluating the same state and events twice gives
the same result.

States: inactive -> active on a low-mood check-in, SOS access, missed
actions on a prior day, a trigger date, or a manual switch.
active -> inactive when the calendar day advances past the activation
day, when a later check-in reports recovered mood, or manually.
"""

from dataclasses import replace
from datetime import datetime
from typing import List, Optional

from mentalspace.analytics.constants import DEFAULT_THRESHOLDS, AnalyticsThresholds
from mentalspace.analytics.models import (
    BadDayEvents,
    BadDayState,
    BadDayTrigger,
    DailyPlan,
    PlannedAction,
)

# Triggers whose moment is known; the others are day-level facts
TIMESTAMPED_TRIGGERS = frozenset({"low_mood", "sos_used", "manual"})

GENTLE_MESSAGES = {
    "welcome": "Today feels hard. That's okay. We're keeping things simple.",
    "plan": "Here's one small thing that might help. No pressure.",
    "incomplete": "It's okay if you can't do this right now. Tomorrow is a new day.",
    "encouragement": "You're doing your best, and that's enough.",
}

STANDARD_MESSAGES = {
    "welcome": "Welcome back. Here's your plan for today.",
    "plan": "These actions were picked for how you're feeling today.",
    "incomplete": "There's still time to finish today's plan.",
    "encouragement": "Nice work showing up for yourself.",
}

SUPPORT_PROMPTS = [
    "Would you like to talk to someone from your safety plan?",
    "Remember: This feeling is temporary. You've gotten through hard days before.",
    "Consider reaching out to a friend or using the SOS resources.",
    "Your only job today is to take care of yourself.",
    "It's okay to rest. Recovery is not linear.",
]

ANCHOR_DEADLINES = [
    (("morning", "waking", "breakfast"), 12),
    (("lunch", "afternoon"), 17),
    (("dinner", "evening", "bed"), 21),
]
END_OF_DAY_HOUR = 21


def collect_triggers(
    events: BadDayEvents,
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> List[BadDayTrigger]:
    """Activation triggers present in today's events."""
    triggers = []

    if events.checkin_mood is not None and events.checkin_mood <= thresholds.bad_day_mood:
        triggers.append(BadDayTrigger(
            type="low_mood",
            description=f"Mood rating of {events.checkin_mood}",
            timestamp=events.checkin_at or events.now,
        ))

    if events.sos_used_at is not None and events.sos_used_at.date() == events.today:
        triggers.append(BadDayTrigger(
            type="sos_used",
            description="SOS support accessed",
            timestamp=events.sos_used_at,
        ))

    if events.missed_actions >= thresholds.missed_actions_trigger:
        triggers.append(BadDayTrigger(
            type="missed_actions",
            description=f"{events.missed_actions} actions not completed",
            timestamp=events.now,
        ))

    if events.trigger_date_label:
        triggers.append(BadDayTrigger(
            type="trigger_date",
            description=f"Difficult date: {events.trigger_date_label}",
            timestamp=events.now,
        ))

    if events.manual == "activate":
        triggers.append(BadDayTrigger(
            type="manual",
            description="Turned on manually",
            timestamp=events.now,
        ))

    return triggers


def _is_fresh(trigger: BadDayTrigger, state: BadDayState, events: BadDayEvents) -> bool:
    # After a same-day deactivation only events newer than it may re-activate
    deactivated_at = state.deactivated_at
    if deactivated_at is None or deactivated_at.date() < events.today:
        return True
    if trigger.type == "manual":
        return True
    if trigger.type in TIMESTAMPED_TRIGGERS:
        return trigger.timestamp > deactivated_at
    return False


def _recovered(
    state: BadDayState,
    events: BadDayEvents,
    thresholds: AnalyticsThresholds,
) -> bool:
    if events.checkin_mood is None or events.checkin_mood < thresholds.bad_day_recovery_mood:
        return False
    if events.checkin_at is None:
        return False
    # The check-in must come after the activation it would end
    return state.activated_at is None or events.checkin_at > state.activated_at


def _deactivated(state: BadDayState, at: Optional[datetime]) -> BadDayState:
    return BadDayState(active=False, deactivated_at=at)


def should_deactivate(
    state: BadDayState,
    events: BadDayEvents,
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> Optional[str]:
    """
    Why an active state should end, if it should.

    Returns:
        "manual", "expired", "recovered" or None
    """
    if not state.active:
        return None
    if events.manual == "deactivate":
        return "manual"
    if state.activated_date is not None and events.today > state.activated_date:
        return "expired"
    if _recovered(state, events, thresholds):
        return "recovered"
    return None


def transition(
    state: BadDayState,
    events: BadDayEvents,
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> BadDayState:
    """
    Compute the next bad-day state.

    Args:
        state: Current state (not modified)
        events: Today's check-in, SOS, plan and trigger-date facts

    Returns:
        The new state; the same object when nothing changed
    """
    reason = should_deactivate(state, events, thresholds)

    if reason in ("manual", "recovered"):
        return _deactivated(state, events.now)

    if reason == "expired":
        # Expiry is not a user event: keep the previous deactivation time
        # so today's day-level triggers can open a fresh window
        state = _deactivated(state, state.deactivated_at)

    triggers = collect_triggers(events, thresholds)

    if state.active:
        recorded = {t.type for t in state.triggers}
        new = [t for t in triggers if t.type not in recorded]
        if not new:
            return state
        return replace(state, triggers=state.triggers + new)

    if events.manual == "deactivate":
        return state

    fresh = [t for t in triggers if _is_fresh(t, state, events)]
    if not fresh:
        return state

    return BadDayState(
        active=True,
        activated_date=events.today,
        activated_at=events.now,
        deactivated_at=state.deactivated_at,
        triggers=fresh,
    )


def adjust_actions_for_bad_day(
    actions: List[PlannedAction],
    state: BadDayState,
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
) -> List[PlannedAction]:
    """
    Shape a plan for the current state.

    While active the plan collapses to one short action, preferring coping
    actions, then ones already short, then simplified ones, then the
    shortest. The original list is not modified.
    """
    if not state.active or not actions:
        return list(actions)

    max_duration = thresholds.bad_day_max_duration
    chosen = min(
        actions,
        key=lambda a: (
            a.category != "coping",
            a.duration > max_duration,
            not a.simplified,
            a.duration,
        ),
    )
    shortened = replace(chosen, duration=max(1, min(chosen.duration, max_duration)), simplified=True)
    return [shortened][: thresholds.bad_day_max_actions]


def message_for(kind: str, state: BadDayState) -> str:
    messages = GENTLE_MESSAGES if state.active else STANDARD_MESSAGES
    return messages.get(kind, messages["encouragement"])


def support_prompts(state: BadDayState) -> List[str]:
    return list(SUPPORT_PROMPTS) if state.active else []


def count_missed_actions(plan: Optional[DailyPlan], now: datetime) -> int:
    """
    Actions that should have been done by now but were not.

    Every open action on a past day's plan counts. For today's plan the
    action's anchor decides its deadline hour.
    """
    if plan is None:
        return 0

    open_actions = [a for a in plan.actions if not a.completed and not a.skipped]
    if plan.date < now.date():
        return len(open_actions)

    missed = 0
    for action in open_actions:
        deadline = END_OF_DAY_HOUR
        anchor = (action.anchor or "").lower()
        for words, hour in ANCHOR_DEADLINES:
            if any(word in anchor for word in words):
                deadline = hour
                break
        if now.hour >= deadline:
            missed += 1

    return missed
