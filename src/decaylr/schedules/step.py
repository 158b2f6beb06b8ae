from decaylr import backend
from decaylr.core.enums import ScheduleType
from decaylr.core.options import option
from .base import Schedule
from .factory import SCHEDULES


@SCHEDULES.regist()
class StepSchedule(Schedule):
    """
    Step schedule for learning rates, decays by `decay_rate` every `step` steps.

        value = initial_value * decay_rate ^ floor(step_count / step)
    """

    backend_class = backend.StepSchedule

    _options = {
        'decay_rate': option('decay_rate', 'The decay rate (default = 0.1).',
                             display_order=2, display_name='decay rate'),
        'step': option('step', 'The number of steps between two decays (default = 1.0).', display_order=3),
    }

    def __init__(self, initial_value=0.1, schedule_type=ScheduleType.EPOCH, decay_rate=0.1, step=1.):
        super().__init__(initial_value=initial_value, schedule_type=schedule_type)
        self.decay_rate = decay_rate
        self.step = step

    def initialize_backend(self) -> backend.StepSchedule:
        return self._store_backend(backend.StepSchedule(self.schedule_type.to_backend(),
                                                        self.initial_value,
                                                        self.decay_rate,
                                                        self.step))

    def set_backend(self, new_backend: backend.StepSchedule):
        self._check_backend(new_backend)
        self.decay_rate = new_backend.decay_rate
        self.step = new_backend.step
        self.initial_value = new_backend.initial_value
        self.schedule_type = ScheduleType.from_backend(new_backend.schedule_type)
