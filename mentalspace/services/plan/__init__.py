"""Daily plan services."""

from mentalspace.services.plan.plan_service import PlanService

__all__ = ["PlanService"]
