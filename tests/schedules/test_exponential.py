import copy
import pickle

import pytest

from decaylr import backend, ExponentialSchedule, InverseSchedule, ScheduleType
from decaylr.core.raises import UnknownOptionError, MalformedOptionError


def test_defaults():
    sche = ExponentialSchedule()
    assert sche.initial_value == 0.1
    assert sche.schedule_type is ScheduleType.EPOCH
    assert sche.gamma == 0.99
    assert sche.last_backend is None


def test_round_trip():
    sche = ExponentialSchedule(initial_value=0.1, schedule_type=ScheduleType.EPOCH, gamma=0.95)
    value = sche.initialize_backend()
    assert value == backend.ExponentialSchedule(backend.ScheduleType.EPOCH, 0.1, 0.95)
    assert sche.last_backend is value

    res = ExponentialSchedule()
    res.set_backend(value)
    assert res.gamma == 0.95
    assert res.initial_value == 0.1
    assert res.schedule_type is ScheduleType.EPOCH
    assert res == sche
    assert res.initialize_backend() == value


def test_round_trip_iteration():
    sche = ExponentialSchedule(initial_value=0.5, schedule_type='iteration', gamma=0.9)
    res = ExponentialSchedule()
    res.set_backend(sche.initialize_backend())
    assert res.schedule_type is ScheduleType.ITERATION
    assert res.initialize_backend().schedule_type is backend.ScheduleType.ITERATION
    assert res == sche


def test_decay():
    sche = ExponentialSchedule(initial_value=1., gamma=0.5)
    assert [sche.value_at(0, i) for i in range(3)] == [1., 0.5, 0.25]
    assert sche(0, 2) == 0.25


def test_backend_follows_fields():
    sche = ExponentialSchedule(initial_value=1., gamma=0.5)
    first = sche.backend
    sche.gamma = 0.1
    assert sche.backend.gamma == 0.1
    assert first.gamma == 0.5
    assert sche.value_at(0, 1) == pytest.approx(0.1)


def test_backend_setter():
    sche = ExponentialSchedule()
    sche.backend = backend.ExponentialSchedule(backend.ScheduleType.ITERATION, 0.2, 0.8)
    assert sche.initial_value == 0.2
    assert sche.gamma == 0.8
    assert sche.schedule_type is ScheduleType.ITERATION
    assert 'backend' not in sche.to_dict()


def test_wrong_backend():
    sche = ExponentialSchedule(gamma=0.5)
    with pytest.raises(TypeError):
        sche.set_backend(backend.InverseSchedule(backend.ScheduleType.EPOCH, 0.1, 0.99, 1.))
    with pytest.raises(TypeError):
        sche.set_backend(backend.FixedSchedule(backend.ScheduleType.EPOCH, 0.1))
    assert sche.gamma == 0.5


def test_equality():
    a = ExponentialSchedule(gamma=0.9)
    b = ExponentialSchedule(gamma=0.9)
    assert a == b
    assert hash(a) == hash(b)
    assert a != ExponentialSchedule(gamma=0.8)
    assert a != ExponentialSchedule(gamma=0.9, schedule_type='iteration')
    assert ExponentialSchedule() != InverseSchedule()

    # building a backend does not change equality
    a.initialize_backend()
    assert a == b
    assert hash(a) == hash(b)


def test_repr():
    sche = ExponentialSchedule(gamma=0.5)
    assert repr(sche) == 'ExponentialSchedule(initial_value=0.1, schedule_type=epoch, gamma=0.5)'
    assert str(sche) == repr(sche)


def test_to_dict():
    sche = ExponentialSchedule(schedule_type='iteration')
    assert sche.to_dict() == {'initial_value': 0.1, 'schedule_type': 'iteration', 'gamma': 0.99}
    assert ExponentialSchedule().from_dict(sche.to_dict()) == sche


def test_copy():
    sche = ExponentialSchedule(gamma=0.5)
    sche.initialize_backend()
    for res in [sche.copy(), copy.copy(sche), copy.deepcopy(sche)]:
        assert isinstance(res, ExponentialSchedule)
        assert res == sche
        assert res.last_backend is None
    res = sche.copy()
    res.gamma = 0.1
    assert sche.gamma == 0.5


def test_pickle():
    sche = ExponentialSchedule(schedule_type='iteration', gamma=0.5)
    res = pickle.loads(pickle.dumps(sche))
    assert isinstance(res, ExponentialSchedule)
    assert res == sche
    assert res.schedule_type is ScheduleType.ITERATION


def test_options():
    sche = ExponentialSchedule()
    sche.set_options('-gamma 0.5 -initial_value 1')
    assert sche.get_options() == ['-initial_value', '1.0', '-schedule_type', 'epoch', '-gamma', '0.5']
    assert [opt.field for opt in sche.list_options()] == ['initial_value', 'schedule_type', 'gamma']


def test_numbers_normalized():
    a = ExponentialSchedule(initial_value=1)
    b = ExponentialSchedule(initial_value=1.0)
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
    assert isinstance(a.initial_value, float)

    a.gamma = 1
    b.gamma = '1'
    assert hash(a) == hash(b)


def test_undeclared_field():
    sche = ExponentialSchedule()
    with pytest.raises(UnknownOptionError):
        sche.gama = 0.5
    with pytest.raises(UnknownOptionError):
        sche.from_dict({'gama': 0.5})
    with pytest.raises(MalformedOptionError):
        sche.gamma = 'fast'
    assert sche.to_dict() == ExponentialSchedule().to_dict()
