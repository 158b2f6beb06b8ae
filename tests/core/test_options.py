import pytest

from decaylr import ExponentialSchedule, ScheduleType
from decaylr.core.options import list_options, get_options, set_options, convert_option, describe_options, option
from decaylr.core.raises import UnknownOptionError, MalformedOptionError, OptionError


def test_list_options_order():
    opts = list_options(ExponentialSchedule)
    assert [opt.field for opt in opts] == ['initial_value', 'schedule_type', 'gamma']
    assert [opt.display_order for opt in opts] == [0, 1, 2]
    assert list_options(ExponentialSchedule()) == opts


def test_gamma_metadata():
    gamma = {opt.field: opt for opt in list_options(ExponentialSchedule)}['gamma']
    assert gamma.flag == '-gamma'
    assert gamma.synopsis == '-gamma <double>'
    assert '0.99' in gamma.description
    assert gamma.display_order > max(opt.display_order for opt in list_options(ExponentialSchedule)
                                     if opt.field != 'gamma')


def test_get_options_default():
    assert get_options(ExponentialSchedule()) == ['-initial_value', '0.1',
                                                  '-schedule_type', 'epoch',
                                                  '-gamma', '0.99']


def test_set_options():
    sche = ExponentialSchedule()
    set_options(sche, ['-gamma', '0.95', '-schedule_type', 'iteration'])
    assert sche.gamma == 0.95
    assert sche.schedule_type is ScheduleType.ITERATION
    assert sche.initial_value == 0.1

    set_options(sche, '-initial_value 0.5')
    assert sche.initial_value == 0.5
    assert sche.gamma == 0.95


def test_set_options_round_trip():
    sche = ExponentialSchedule(initial_value=0.3, schedule_type='iteration', gamma=0.7)
    res = ExponentialSchedule()
    set_options(res, get_options(sche))
    assert res == sche


def test_set_options_is_permissive():
    sche = ExponentialSchedule()
    set_options(sche, ['-gamma', '-0.5', '-initial_value', '12'])
    assert sche.gamma == -0.5
    assert sche.initial_value == 12.
    assert sche.value_at(2, 2) == pytest.approx(3.)


def test_unknown_option():
    sche = ExponentialSchedule()
    with pytest.raises(UnknownOptionError):
        set_options(sche, ['-power', '2'])
    with pytest.raises(UnknownOptionError):
        set_options(sche, ['gamma', '0.5'])


def test_malformed_option():
    sche = ExponentialSchedule()
    with pytest.raises(MalformedOptionError) as e:
        set_options(sche, ['-initial_value', '0.2', '-gamma', 'fast'])
    assert isinstance(e.value.__cause__, ValueError)
    assert isinstance(e.value, OptionError)
    # nothing is assigned when one value is rejected
    assert sche.initial_value == 0.1

    with pytest.raises(MalformedOptionError):
        set_options(sche, ['-gamma'])
    with pytest.raises(MalformedOptionError):
        set_options(sche, ['-schedule_type', 'batch'])


def test_describe_options():
    text = describe_options(ExponentialSchedule)
    assert '-gamma <double>' in text
    assert '-schedule_type <iteration|epoch>' in text
    assert text.index('-initial_value') < text.index('-gamma')


def test_option_defaults():
    opt = option('step_size', 'The step size (default = 1).', display_order=3, parser=int)
    assert opt.cli_name == 'step_size'
    assert opt.display_name == 'step_size'
    assert opt.synopsis == '-step_size <int>'
    assert opt.parser('4') == 4
    assert opt.formatter(ScheduleType.EPOCH) == 'epoch'


def test_convert_option():
    sche = ExponentialSchedule()
    assert convert_option(sche, 'initial_value', 1) == 1.
    assert isinstance(convert_option(sche, 'initial_value', 1), float)
    assert convert_option(sche, 'schedule_type', 'ITERATION') is ScheduleType.ITERATION
    with pytest.raises(UnknownOptionError):
        convert_option(sche, 'gama', 0.5)
    with pytest.raises(MalformedOptionError):
        convert_option(sche, 'gamma', 'fast')
