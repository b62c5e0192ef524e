"""
FastAPI dependencies for MentalSpace application.

Provides dependency injection for all services.
"""

from typing import Annotated, Optional

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from common.auth import JWTAuth, create_auth_dependency
from mentalspace.analytics.constants import DEFAULT_THRESHOLDS, AnalyticsThresholds

# Check-in services
from mentalspace.services.checkin.checkin_service import CheckInService
from mentalspace.services.checkin.checkin_analytics import CheckInAnalytics

# Plan services
from mentalspace.services.plan.plan_service import PlanService

# Crisis services
from mentalspace.services.crisis.crisis_event_service import CrisisEventService

# Predictive services
from mentalspace.services.predictive.trigger_date_service import TriggerDateService
from mentalspace.services.predictive.bad_day_service import BadDayService

# Summary services
from mentalspace.services.summary.weekly_summary_service import WeeklySummaryService

# Notifications
from mentalspace.services.notifications.alert_notifier import AlertNotifier, create_alert_notifier


# ─────────────────────────────────────────────────────────────────
# Global service instances
# ─────────────────────────────────────────────────────────────────

# Auth
_jwt_auth: Optional[JWTAuth] = None

# Analytics
_thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS

# Check-in
_checkin_service: Optional[CheckInService] = None
_checkin_analytics: Optional[CheckInAnalytics] = None

# Plans
_plan_service: Optional[PlanService] = None

# Crisis
_crisis_event_service: Optional[CrisisEventService] = None

# Predictive
_trigger_date_service: Optional[TriggerDateService] = None
_bad_day_service: Optional[BadDayService] = None

# Summaries
_weekly_summary_service: Optional[WeeklySummaryService] = None

# Notifications
_alert_notifier: Optional[AlertNotifier] = None


# ─────────────────────────────────────────────────────────────────
# Initialization
# ─────────────────────────────────────────────────────────────────

def init_auth_services(jwt_secret: str, jwt_algorithm: str = "HS256") -> None:
    """Initialize token verification."""
    global _jwt_auth
    _jwt_auth = JWTAuth(secret=jwt_secret, algorithm=jwt_algorithm)


def init_checkin_services(db: AsyncIOMotorDatabase) -> None:
    """Initialize check-in and plan services."""
    global _checkin_service, _checkin_analytics, _plan_service

    _checkin_service = CheckInService(db=db)
    _plan_service = PlanService(db=db)
    _checkin_analytics = CheckInAnalytics(
        checkin_service=_checkin_service,
        plan_service=_plan_service,
        thresholds=_thresholds
    )


def init_predictive_services(db: AsyncIOMotorDatabase, alert_notifier: str = "none") -> None:
    """Initialize crisis, trigger date, bad-day and notifier services."""
    global _crisis_event_service, _trigger_date_service, _bad_day_service, _alert_notifier

    _crisis_event_service = CrisisEventService(
        db=db,
        cooldown_hours=_thresholds.crisis_cooldown_hours
    )
    _trigger_date_service = TriggerDateService(db=db)
    _bad_day_service = BadDayService(db=db)
    _alert_notifier = create_alert_notifier(alert_notifier)


def init_summary_services(db: AsyncIOMotorDatabase) -> None:
    """Initialize weekly summary services."""
    global _weekly_summary_service
    _weekly_summary_service = WeeklySummaryService(db=db)


def init_all_services(
    db: AsyncIOMotorDatabase,
    jwt_secret: str,
    jwt_algorithm: str = "HS256",
    thresholds: AnalyticsThresholds = DEFAULT_THRESHOLDS,
    alert_notifier: str = "none"
) -> None:
    """
    Initialize all services at application startup.

    Args:
        db: Main MongoDB database connection
        jwt_secret: Secret used to verify bearer tokens
        jwt_algorithm: JWT signing algorithm
        thresholds: Analytics thresholds from settings
        alert_notifier: Notifier name ("none" or "log")
    """
    global _thresholds
    _thresholds = thresholds

    init_auth_services(jwt_secret, jwt_algorithm)
    init_checkin_services(db)
    init_predictive_services(db, alert_notifier)
    init_summary_services(db)


# ─────────────────────────────────────────────────────────────────
# Auth getters
# ─────────────────────────────────────────────────────────────────

def get_jwt_auth() -> JWTAuth:
    """Get token verifier."""
    if _jwt_auth is None:
        raise RuntimeError("Auth services not initialized.")
    return _jwt_auth


require_auth = create_auth_dependency(get_jwt_auth)

CurrentUserId = Annotated[str, Depends(require_auth)]


# ─────────────────────────────────────────────────────────────────
# Analytics getters
# ─────────────────────────────────────────────────────────────────

def get_thresholds() -> AnalyticsThresholds:
    """Get the configured analytics thresholds."""
    return _thresholds


# ─────────────────────────────────────────────────────────────────
# Check-in getters
# ─────────────────────────────────────────────────────────────────

def get_checkin_service() -> CheckInService:
    """Get check-in service instance."""
    if _checkin_service is None:
        raise RuntimeError("Check-in services not initialized.")
    return _checkin_service


def get_checkin_analytics() -> CheckInAnalytics:
    """Get check-in analytics instance."""
    if _checkin_analytics is None:
        raise RuntimeError("Check-in services not initialized.")
    return _checkin_analytics


def get_plan_service() -> PlanService:
    """Get plan service instance."""
    if _plan_service is None:
        raise RuntimeError("Check-in services not initialized.")
    return _plan_service


# ─────────────────────────────────────────────────────────────────
# Predictive getters
# ─────────────────────────────────────────────────────────────────

def get_crisis_event_service() -> CrisisEventService:
    """Get crisis event service instance."""
    if _crisis_event_service is None:
        raise RuntimeError("Predictive services not initialized.")
    return _crisis_event_service


def get_trigger_date_service() -> TriggerDateService:
    """Get trigger date service instance."""
    if _trigger_date_service is None:
        raise RuntimeError("Predictive services not initialized.")
    return _trigger_date_service


def get_bad_day_service() -> BadDayService:
    """Get bad-day service instance."""
    if _bad_day_service is None:
        raise RuntimeError("Predictive services not initialized.")
    return _bad_day_service


def get_alert_notifier() -> AlertNotifier:
    """Get the alert notifier chosen at startup."""
    if _alert_notifier is None:
        raise RuntimeError("Predictive services not initialized.")
    return _alert_notifier


# ─────────────────────────────────────────────────────────────────
# Summary getters
# ─────────────────────────────────────────────────────────────────

def get_weekly_summary_service() -> WeeklySummaryService:
    """Get weekly summary service instance."""
    if _weekly_summary_service is None:
        raise RuntimeError("Summary services not initialized.")
    return _weekly_summary_service
