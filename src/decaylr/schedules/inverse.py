from decaylr import backend
from decaylr.core.enums import ScheduleType
from decaylr.core.options import option
from .base import Schedule
from .factory import SCHEDULES


@SCHEDULES.regist()
class InverseSchedule(Schedule):
    """
    Inverse schedule for learning rates.

        value = initial_value / (1 + gamma * step) ^ power
    """

    backend_class = backend.InverseSchedule

    _options = {
        'gamma': option('gamma', 'The gamma value (default = 0.99).', display_order=2),
        'power': option('power', 'The power value (default = 1.0).', display_order=3),
    }

    def __init__(self, initial_value=0.1, schedule_type=ScheduleType.EPOCH, gamma=0.99, power=1.):
        super().__init__(initial_value=initial_value, schedule_type=schedule_type)
        self.gamma = gamma
        self.power = power

    def initialize_backend(self) -> backend.InverseSchedule:
        return self._store_backend(backend.InverseSchedule(self.schedule_type.to_backend(),
                                                           self.initial_value,
                                                           self.gamma,
                                                           self.power))

    def set_backend(self, new_backend: backend.InverseSchedule):
        self._check_backend(new_backend)
        self.gamma = new_backend.gamma
        self.power = new_backend.power
        self.initial_value = new_backend.initial_value
        self.schedule_type = ScheduleType.from_backend(new_backend.schedule_type)
