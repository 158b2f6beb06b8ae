import pytest

from decaylr import BaseParams, ExponentialSchedule, PolySchedule, ScheduleType, Sgd, StepSchedule
from decaylr.core.raises import UnknownOptionError


def test_from_args():
    sche = ExponentialSchedule().from_args(['--gamma=0.5', '--schedule_type=iteration', '--initial_value', '1'])
    assert sche == ExponentialSchedule(initial_value=1., schedule_type=ScheduleType.ITERATION, gamma=0.5)
    assert isinstance(sche.initial_value, float)

    with pytest.raises(UnknownOptionError):
        ExponentialSchedule().from_args(['--gama=0.5'])


def test_from_args_config(tmp_path):
    fn = str(tmp_path / 'schedule.yaml')
    PolySchedule(power=2., max_iter=10).to_yaml(fn)

    sche = PolySchedule().from_args([f'--config={fn}', '--max_iter=20'])
    assert sche == PolySchedule(power=2., max_iter=20)

    sche = PolySchedule().from_args([f'--config={tmp_path / "missing.yaml"}', '--power=3'])
    assert sche == PolySchedule(power=3.)


def test_yaml(tmp_path):
    fn = tmp_path / 'schedule.yaml'
    fn.write_text('schedule_type: ITERATION\ngamma: 0.5\n')
    sche = ExponentialSchedule().from_yaml(fn)
    assert sche.schedule_type is ScheduleType.ITERATION
    assert sche.gamma == 0.5

    text = sche.to_yaml()
    assert 'schedule_type: iteration' in text
    fn.write_text(text)
    assert ExponentialSchedule().from_yaml(fn) == sche


def test_json(tmp_path):
    fn = tmp_path / 'updater.json'
    updater = Sgd(learning_rate=0.2, schedule=StepSchedule(step=2.), momentum=0.5)
    updater.to_json(fn)
    res = Sgd().from_json(fn)
    assert res == updater
    assert res.schedule == StepSchedule(step=2.)


def test_from_file(tmp_path):
    fn = tmp_path / 'schedule.json'
    fn.write_text(ExponentialSchedule(gamma=0.25).to_json())
    assert ExponentialSchedule().from_file(fn).gamma == 0.25
    with pytest.raises(ValueError):
        ExponentialSchedule().from_file(tmp_path / 'schedule.txt')


def test_base_params():
    res = BaseParams().from_kwargs(a=1, st='NAttr()')
    res.b = [2, 3]
    assert res.to_dict() == {'a': 1, 'st': 'NAttr()', 'b': [2, 3]}
    assert repr(res) == 'BaseParams(a=1, st=NAttr(), b=[2, 3])'

    copied = res.copy()
    res.a = 2
    assert copied.a == 1
    assert copied.hash() != res.hash()
    copied.a = 2
    assert copied.hash() == res.hash()
