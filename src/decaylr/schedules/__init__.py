"""
Learning rate schedules, the order of the imports below is the order users see them in.
"""
from .base import Schedule
from .factory import (SCHEDULES, SERIAL_VERSION, available_schedules, get_schedule_class, create_schedule, to_spec,
                      from_spec, schedule_to_dict, schedule_from_dict, build_backend, sync_from_backend)
from .constant import ConstantSchedule
from .exponential import ExponentialSchedule
from .step import StepSchedule
from .poly import PolySchedule
from .inverse import InverseSchedule
from .sigmoid import SigmoidSchedule
