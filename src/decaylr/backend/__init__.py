"""
Immutable backend schedule values consumed by optimizers.
"""
from .schedule import (ScheduleType, ISchedule, FixedSchedule, ExponentialSchedule, StepSchedule, PolySchedule,
                       InverseSchedule, SigmoidSchedule)
