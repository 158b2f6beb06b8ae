import pytest

from decaylr import backend
from decaylr.core.enums import ScheduleType
from decaylr.core.raises import UnrecognizedBackendValue


@pytest.mark.parametrize('schedule_type', list(ScheduleType))
def test_bijection(schedule_type):
    assert ScheduleType.from_backend(schedule_type.to_backend()) is schedule_type


def test_backend_mapping():
    assert ScheduleType.ITERATION.to_backend() is backend.ScheduleType.ITERATION
    assert ScheduleType.EPOCH.to_backend() is backend.ScheduleType.EPOCH
    assert len({i.to_backend() for i in ScheduleType}) == len(backend.ScheduleType)


@pytest.mark.parametrize('value', [0, 'ITERATION', ScheduleType.EPOCH, None])
def test_unrecognized_backend_value(value):
    with pytest.raises(UnrecognizedBackendValue):
        ScheduleType.from_backend(value)


def test_create_from_str():
    assert ScheduleType.create_from_str('epoch') is ScheduleType.EPOCH
    assert ScheduleType.create_from_str('EPOCH') is ScheduleType.EPOCH
    assert ScheduleType.create_from_str(' Iteration ') is ScheduleType.ITERATION
    assert ScheduleType.create_from_str(ScheduleType.ITERATION) is ScheduleType.ITERATION
    assert ScheduleType.ITERATION.is_iteration()
    assert ScheduleType.EPOCH.is_epoch()
    with pytest.raises(ValueError):
        ScheduleType.create_from_str('batch')
