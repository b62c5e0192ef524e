"""
MentalSpace API Routers.

All routers are imported here for easy access.
"""

from mentalspace.routers.checkin import router as checkin_router
from mentalspace.routers.predictive import router as predictive_router
from mentalspace.routers.plans import router as plans_router
from mentalspace.routers.summaries import router as summaries_router

__all__ = [
    "checkin_router",
    "predictive_router",
    "plans_router",
    "summaries_router",
]
