"""
Workbench-facing learning rate schedules.

A `Schedule` is a small configuration object: it holds the fields a user can set (`initial_value`, `schedule_type`
and the decay parameters of each concrete strategy) and converts them to and from an immutable backend value of
`decaylr.backend`, which is what an optimizer consumes.

Two conversions keep both sides consistent::

    backend = schedule.initialize_backend()   # fields -> backend
    schedule.set_backend(backend)             # backend -> fields

The backend is always derived from the fields: it is rebuilt by every `initialize_backend()` call and it takes no
part in equality, hashing or serialization.

Each field a user can configure is described by an `OptionMetadata` in the `_options` table of its class, which
makes every schedule drivable by `list_options` / `get_options` / `set_options`. Base fields use display orders 0
and 1, strategy fields start at 2. Every assignment goes through the parser of its option, so
`ExponentialSchedule(initial_value=1)` stores `1.0`, and a field no option declares raises `UnknownOptionError`.
"""
import enum
from abc import abstractmethod
from typing import Optional

from decaylr.backend import ISchedule
from decaylr.core.enums import ScheduleType
from decaylr.core.metaclasses import OptionMerge
from decaylr.core.options import option, list_options, get_options, set_options, convert_option
from decaylr.core.params import BaseParams
from decaylr.utils.logger import get_global_logger

__all__ = ['Schedule']


class Schedule(BaseParams, metaclass=OptionMerge):
    """Base class of learning rate schedules."""

    backend_class = ISchedule

    _options = {
        'initial_value': option('initial_value',
                                'The initial learning rate (default = 0.1).',
                                display_order=0, display_name='initial value'),
        'schedule_type': option('schedule_type',
                                'Whether the schedule decays per iteration or per epoch (default = epoch).',
                                display_order=1, display_name='schedule type',
                                parser=ScheduleType.create_from_str, metavar='iteration|epoch'),
    }

    def __init__(self, initial_value=0.1, schedule_type=ScheduleType.EPOCH):
        super().__init__()
        self.__dict__['_backend'] = None
        self.initial_value = initial_value
        self.schedule_type = schedule_type

    def _convert(self, key, value):
        return convert_option(self, key, value)

    @abstractmethod
    def initialize_backend(self) -> ISchedule:
        """
        Build a new backend value from the current fields.

        Returns:
            The backend value, also kept as the last built backend.
        """

    @abstractmethod
    def set_backend(self, backend: ISchedule):
        """
        Overwrite every field of this schedule from `backend`.

        After this call `initialize_backend()` returns a value equal to `backend`.

        Raises:
            TypeError: if `backend` is not an instance of `backend_class`.
        """

    def _check_backend(self, backend):
        if not isinstance(backend, self.backend_class):
            raise TypeError(f'{type(self).__name__} expects a {self.backend_class.__name__} backend, '
                            f'got {type(backend).__name__}')
        get_global_logger().debug(f'{type(self).__name__} synchronized from backend', backend)

    def _store_backend(self, backend: ISchedule) -> ISchedule:
        self.__dict__['_backend'] = backend
        return backend

    @property
    def backend(self) -> ISchedule:
        """The backend value built from the current fields."""
        return self.initialize_backend()

    @backend.setter
    def backend(self, value: ISchedule):
        self.set_backend(value)

    @property
    def last_backend(self) -> Optional[ISchedule]:
        """The value returned by the most recent `initialize_backend()`, None if it was never called."""
        return self.__dict__.get('_backend', None)

    def value_at(self, iteration, epoch) -> float:
        """Return the learning rate at the given position of training."""
        return self.initialize_backend().value_at(iteration, epoch)

    def __call__(self, iteration, epoch=0):
        return self.value_at(iteration, epoch)

    def list_options(self):
        """Returns the option metadata of this schedule, sorted by display order."""
        return list_options(self)

    def get_options(self):
        """Returns the current settings as `-name value` strings."""
        return get_options(self)

    def set_options(self, argv):
        """Parses `-name value` options and assigns them, see `decaylr.core.options.set_options`."""
        return set_options(self, argv)

    def to_dict(self):
        """Returns the fields as a flat dict, the schedule type as its string value."""
        res = {}
        for k, v in self.items():
            if isinstance(v, enum.Enum):
                v = v.value
            res[k] = v
        return res

    def __eq__(self, other):
        if type(self) is not type(other):
            return False
        return self.to_dict() == other.to_dict()

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((type(self).__name__, self.hash()))

    def __repr__(self):
        content = ', '.join(["{}={}".format(opt.field, opt.formatter(self[opt.field]))
                             for opt in list_options(self)])
        return "{}({})".format(self.__class__.__name__, content)

    __str__ = __repr__

    def __reduce__(self):
        return (self.__class__, (), {'fields': self.to_dict()})

    def __setstate__(self, state):
        self.from_dict(state['fields'])

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def copy(self):
        """Returns a schedule of the same class with equal fields."""
        return self.__class__().from_dict(self.to_dict())
