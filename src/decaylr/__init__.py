"""
Learning rate schedules for a machine learning workbench, with a torch optimizer backend.
"""
__version__ = "0.1.0"

from .core import BaseParams, ScheduleType, list_options, get_options, set_options
from .schedules import (Schedule, ConstantSchedule, ExponentialSchedule, StepSchedule, PolySchedule, InverseSchedule,
                        SigmoidSchedule, create_schedule, from_spec, to_spec, build_backend, sync_from_backend)
from .updater import Updater, Sgd, Adam
from .utils.logger import Logger, get_global_logger
