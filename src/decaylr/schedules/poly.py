from decaylr import backend
from decaylr.core.enums import ScheduleType
from decaylr.core.options import option
from .base import Schedule
from .factory import SCHEDULES


@SCHEDULES.regist()
class PolySchedule(Schedule):
    """
    Polynomial schedule for learning rates, reaches zero at `max_iter` and stays there.

        value = initial_value * (1 - min(step, max_iter) / max_iter) ^ power
    """

    backend_class = backend.PolySchedule

    _options = {
        'power': option('power', 'The power value (default = 1.0).', display_order=2),
        'max_iter': option('max_iter', 'The step at which the rate reaches zero (default = 100).',
                           display_order=3, parser=int, display_name='maximum iterations'),
    }

    def __init__(self, initial_value=0.1, schedule_type=ScheduleType.EPOCH, power=1., max_iter=100):
        super().__init__(initial_value=initial_value, schedule_type=schedule_type)
        self.power = power
        self.max_iter = max_iter

    def initialize_backend(self) -> backend.PolySchedule:
        return self._store_backend(backend.PolySchedule(self.schedule_type.to_backend(),
                                                        self.initial_value,
                                                        self.power,
                                                        self.max_iter))

    def set_backend(self, new_backend: backend.PolySchedule):
        self._check_backend(new_backend)
        self.power = new_backend.power
        self.max_iter = new_backend.max_iter
        self.initial_value = new_backend.initial_value
        self.schedule_type = ScheduleType.from_backend(new_backend.schedule_type)
