import enum

from decaylr.backend import ScheduleType as BackendScheduleType
from .raises import UnrecognizedBackendValue


class ScheduleType(enum.Enum):
    """Whether the step of a schedule counts optimizer iterations or full data epochs.
    """
    ITERATION = 'iteration'
    EPOCH = 'epoch'

    def is_iteration(self):
        """Check if the schedule decays once per optimizer iteration.

        Returns:
            bool: True if the step counts iterations, False otherwise.
        """
        return self.value == 'iteration'

    def is_epoch(self):
        """Check if the schedule decays once per epoch.

        Returns:
            bool: True if the step counts epochs, False otherwise.
        """
        return self.value == 'epoch'

    def to_backend(self) -> BackendScheduleType:
        """Return the backend enumerator of this schedule type."""
        return _TO_BACKEND[self]

    @staticmethod
    def from_backend(value) -> 'ScheduleType':
        """Create a ScheduleType from a backend enumerator.

        Args:
            value (BackendScheduleType): the enumerator read from a backend schedule.

        Returns:
            ScheduleType: The matching workbench schedule type.

        Raises:
            UnrecognizedBackendValue: if `value` has no counterpart.
        """
        for member, backend in _TO_BACKEND.items():
            if backend is value:
                return member
        raise UnrecognizedBackendValue(f'Unrecognized backend schedule type: {value!r}')

    @staticmethod
    def create_from_str(value):
        """Create a ScheduleType instance from a string.

        Both member names and values are accepted, case-insensitive ('EPOCH', 'epoch').
        An instance is returned unchanged.

        Args:
            value (str): A string representing the schedule type.

        Returns:
            ScheduleType: A ScheduleType instance.
        """
        if isinstance(value, ScheduleType):
            return value
        return ScheduleType(str(value).strip().lower())


_TO_BACKEND = {
    ScheduleType.ITERATION: BackendScheduleType.ITERATION,
    ScheduleType.EPOCH: BackendScheduleType.EPOCH,
}
