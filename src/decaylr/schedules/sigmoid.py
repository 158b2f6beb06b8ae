from decaylr import backend
from decaylr.core.enums import ScheduleType
from decaylr.core.options import option
from .base import Schedule
from .factory import SCHEDULES


@SCHEDULES.regist()
class SigmoidSchedule(Schedule):
    r"""
    Sigmoid schedule for learning rates, centered on `step_size`.

        value = initial_value / (1 + exp(-gamma * (step - step_size)))

    A negative gamma gives a falling curve

    initial_value |-------.
                  |        \
                0 |         `--------
                         ↑
                     step_size
    """

    backend_class = backend.SigmoidSchedule

    _options = {
        'gamma': option('gamma', 'The gamma value (default = 0.99).', display_order=2),
        'step_size': option('step_size', 'The step at which the curve is centered (default = 1).',
                            display_order=3, parser=int, display_name='step size'),
    }

    def __init__(self, initial_value=0.1, schedule_type=ScheduleType.EPOCH, gamma=0.99, step_size=1):
        super().__init__(initial_value=initial_value, schedule_type=schedule_type)
        self.gamma = gamma
        self.step_size = step_size

    def initialize_backend(self) -> backend.SigmoidSchedule:
        return self._store_backend(backend.SigmoidSchedule(self.schedule_type.to_backend(),
                                                           self.initial_value,
                                                           self.gamma,
                                                           self.step_size))

    def set_backend(self, new_backend: backend.SigmoidSchedule):
        self._check_backend(new_backend)
        self.gamma = new_backend.gamma
        self.step_size = new_backend.step_size
        self.initial_value = new_backend.initial_value
        self.schedule_type = ScheduleType.from_backend(new_backend.schedule_type)
