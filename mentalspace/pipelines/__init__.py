"""
MentalSpace Pipelines.

Business logic orchestration functions.
"""

from mentalspace.pipelines.checkin import *
from mentalspace.pipelines.plan import *
from mentalspace.pipelines.predictive import *
from mentalspace.pipelines.summary import *
