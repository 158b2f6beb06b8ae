from decaylr import backend
from decaylr.core.enums import ScheduleType
from .base import Schedule
from .factory import SCHEDULES


@SCHEDULES.regist()
class ConstantSchedule(Schedule):
    """A schedule that keeps the learning rate at `initial_value`."""

    backend_class = backend.FixedSchedule

    def initialize_backend(self) -> backend.FixedSchedule:
        return self._store_backend(backend.FixedSchedule(self.schedule_type.to_backend(), self.initial_value))

    def set_backend(self, new_backend: backend.FixedSchedule):
        self._check_backend(new_backend)
        self.initial_value = new_backend.initial_value
        self.schedule_type = ScheduleType.from_backend(new_backend.schedule_type)
