from decaylr import backend
from decaylr.core.enums import ScheduleType
from decaylr.core.options import option
from .base import Schedule
from .factory import SCHEDULES


@SCHEDULES.regist()
class ExponentialSchedule(Schedule):
    """
    Exponential schedule for learning rates.

        value = initial_value * gamma ^ step
    """

    backend_class = backend.ExponentialSchedule

    _options = {
        'gamma': option('gamma', 'The gamma value (default = 0.99).', display_order=2),
    }

    def __init__(self, initial_value=0.1, schedule_type=ScheduleType.EPOCH, gamma=0.99):
        super().__init__(initial_value=initial_value, schedule_type=schedule_type)
        self.gamma = gamma

    def initialize_backend(self) -> backend.ExponentialSchedule:
        return self._store_backend(backend.ExponentialSchedule(self.schedule_type.to_backend(),
                                                               self.initial_value,
                                                               self.gamma))

    def set_backend(self, new_backend: backend.ExponentialSchedule):
        self._check_backend(new_backend)
        self.gamma = new_backend.gamma
        self.initial_value = new_backend.initial_value
        self.schedule_type = ScheduleType.from_backend(new_backend.schedule_type)
