"""
Build integration step implementations.
"""

from annalist.core.steps.base import StepBase, StepPlan, StepResult, StepStatus
from annalist.core.steps.report import GenerateReportStep
from annalist.core.steps.clean import ClearHistoryStep

__all__ = [
    "StepBase",
    "StepPlan",
    "StepResult",
    "StepStatus",
    "GenerateReportStep",
    "ClearHistoryStep",
]
