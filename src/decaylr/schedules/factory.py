"""
Lookup and (de)serialization of schedules.

Every concrete schedule registers itself in `SCHEDULES`, which is the list of schedule types a user can pick from.
Schedules travel in three forms:

* a specification string, the class name followed by its options::

    "ExponentialSchedule -initial_value 0.1 -schedule_type epoch -gamma 0.99"

* a version-tagged dict (`schedule_to_dict` / `schedule_from_dict`), suitable for json and yaml files,
* a backend value (`build_backend` / `sync_from_backend`).
"""
import shlex
from typing import Mapping

from decaylr.backend import ISchedule
from decaylr.core.options import get_options, set_options
from decaylr.decorators.regist import Register
from .base import Schedule

__all__ = ['SCHEDULES', 'SERIAL_VERSION', 'available_schedules', 'get_schedule_class', 'create_schedule',
           'to_spec', 'from_spec', 'schedule_to_dict', 'schedule_from_dict', 'build_backend',
           'sync_from_backend']

SCHEDULES = Register('schedules')

# bump when the field set of a registered schedule changes
SERIAL_VERSION = 1


def available_schedules():
    """Names of the registered schedules, in registration order."""
    return SCHEDULES.names()


def get_schedule_class(name: str):
    """
    Returns the registered schedule class called `name`.

    Raises:
        KeyError: if no schedule is registered under `name`.
    """
    res = SCHEDULES[name]
    if res is None:
        raise KeyError(f'Unknown schedule {name!r}, available: {available_schedules()}')
    return res


def create_schedule(name: str, **fields) -> Schedule:
    """
    Create a registered schedule and assign `fields` to it.

    Examples:
        create_schedule('ExponentialSchedule', gamma=0.9, schedule_type='iteration')
    """
    return get_schedule_class(name)().from_dict(fields)


def to_spec(schedule: Schedule) -> str:
    """Returns the specification string of `schedule`."""
    return ' '.join([type(schedule).__name__, *[shlex.quote(i) for i in get_options(schedule)]])


def from_spec(spec: str) -> Schedule:
    """
    Create a schedule from its specification string.

    Options that are left out keep their default value.

    Raises:
        KeyError: if the class name is not registered.
        OptionError: if the options cannot be parsed.
    """
    tokens = shlex.split(spec)
    if len(tokens) == 0:
        raise ValueError('Empty schedule specification.')
    res = get_schedule_class(tokens[0])()
    set_options(res, tokens[1:])
    return res


def schedule_to_dict(schedule: Schedule) -> dict:
    """Returns a version-tagged dict describing `schedule`."""
    return {
        'class': type(schedule).__name__,
        'version': SERIAL_VERSION,
        'fields': schedule.to_dict(),
    }


def schedule_from_dict(dic: Mapping) -> Schedule:
    """
    Restore a schedule from the output of `schedule_to_dict`.

    Raises:
        KeyError: if the class name is not registered.
        ValueError: if the dict was written by an incompatible version.
    """
    version = dic.get('version', None)
    if version != SERIAL_VERSION:
        raise ValueError(f'Unsupported schedule version {version!r}, expected {SERIAL_VERSION}.')
    return create_schedule(dic['class'], **dict(dic.get('fields', {})))


def build_backend(schedule: Schedule) -> ISchedule:
    """Build the backend value of `schedule` from its current fields."""
    return schedule.initialize_backend()


def sync_from_backend(backend: ISchedule) -> Schedule:
    """
    Create the schedule whose fields match `backend`.

    The schedule class is the registered one whose `backend_class` is exactly the class of `backend`.

    Raises:
        TypeError: if no registered schedule builds this kind of backend.
    """
    for schedule_cls in SCHEDULES.values():
        if schedule_cls.backend_class is type(backend):
            res = schedule_cls()
            res.set_backend(backend)
            return res
    raise TypeError(f'No registered schedule for backend {type(backend).__name__}.')
