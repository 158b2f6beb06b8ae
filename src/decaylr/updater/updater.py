"""
Optimizer configurations.

An `Updater` owns the learning rate and its `Schedule`, and builds the torch optimizer that training runs with::

    updater = Adam()
    updater.set_options('-lr 0.01 -lr_schedule "ExponentialSchedule -initial_value 0.01 -gamma 0.9"')
    optimizer = updater.build(model.parameters())
    for epoch in range(10):
        updater.step_lr(optimizer, iteration, epoch)
        ...

With a `ConstantSchedule` the schedule follows `learning_rate` (and assigning one sets `learning_rate` to its
initial value); any other schedule takes over from it.
"""
from abc import abstractmethod
from typing import Mapping

import torch

from decaylr.core.metaclasses import OptionMerge
from decaylr.core.options import option, list_options, get_options, set_options, convert_option
from decaylr.core.params import BaseParams
from decaylr.decorators.regist import Register
from decaylr.schedules import ConstantSchedule, Schedule, from_spec, to_spec, schedule_to_dict, schedule_from_dict
from decaylr.utils.logger import get_global_logger

__all__ = ['UPDATERS', 'Updater', 'Sgd', 'Adam']

UPDATERS = Register('updaters')


def _parse_schedule(value):
    if isinstance(value, Schedule):
        return value
    try:
        return from_spec(value)
    except KeyError as e:
        raise ValueError(str(e)) from e


class Updater(BaseParams, metaclass=OptionMerge):
    """Base class of optimizer configurations."""

    _options = {
        'learning_rate': option('learning_rate', 'The learning rate (default = 0.001).',
                                display_order=0, cli_name='lr', display_name='learning rate'),
        'schedule': option('schedule', 'The learning rate schedule (default = ConstantSchedule).',
                           display_order=1, cli_name='lr_schedule', display_name='learning rate schedule',
                           parser=_parse_schedule, formatter=to_spec, metavar='specification'),
    }

    def __init__(self, learning_rate=0.001, schedule: Schedule = None):
        super().__init__()
        self.learning_rate = learning_rate
        if schedule is None:
            schedule = ConstantSchedule(initial_value=self.learning_rate)
        self.schedule = schedule

    @property
    def schedule(self) -> Schedule:
        return self.__dict__['_schedule']

    @schedule.setter
    def schedule(self, value: Schedule):
        if not isinstance(value, Schedule):
            raise TypeError(f'Expected a Schedule, got {type(value).__name__}')
        self.__dict__['_schedule'] = value
        if isinstance(value, ConstantSchedule):
            self.learning_rate = value.initial_value

    def _convert(self, key, value):
        value = convert_option(self, key, value)
        if key == 'learning_rate':
            schedule = self.__dict__.get('_schedule', None)
            if isinstance(schedule, ConstantSchedule):
                schedule.initial_value = value
        return value

    def lr_at(self, iteration, epoch) -> float:
        """Return the learning rate at the given position of training."""
        return self.schedule.value_at(iteration, epoch)

    def build(self, params) -> torch.optim.Optimizer:
        """
        Create the torch optimizer for `params`, starting at the rate of step 0.

        Args:
            params: an iterable of tensors or of param group dicts, as accepted by torch optimizers.
        """
        lr = self.lr_at(0, 0)
        get_global_logger().debug(f'Build {type(self).__name__} with lr={lr}, schedule={self.schedule}')
        return self._create(params, lr)

    @abstractmethod
    def _create(self, params, lr) -> torch.optim.Optimizer:
        """Create the torch optimizer. Must be implemented in a subclass."""

    def step_lr(self, optimizer: torch.optim.Optimizer, iteration, epoch) -> float:
        """
        Write the learning rate of the given position into every param group of `optimizer`.

        Returns:
            The new learning rate.
        """
        new_lr = self.lr_at(iteration, epoch)
        for param_group in optimizer.param_groups:  # type:dict
            param_group['lr'] = new_lr
        return new_lr

    def set_backend(self, optimizer: torch.optim.Optimizer):
        """
        Read the hyperparameters of this configuration back out of the first param group of `optimizer`.

        The schedule is left unchanged.
        """
        group = optimizer.param_groups[0]
        self.learning_rate = group['lr']
        self._read_group(group)

    def _read_group(self, group: Mapping):
        """Read subclass hyperparameters out of a param group."""

    def list_options(self):
        return list_options(self)

    def get_options(self):
        return get_options(self)

    def set_options(self, argv):
        return set_options(self, argv)

    def to_dict(self):
        res = super().to_dict()
        res['lr_schedule'] = schedule_to_dict(self.schedule)
        return res

    def from_dict(self, dic: Mapping):
        dic = dict(dic)
        schedule = dic.pop('lr_schedule', None)
        if isinstance(schedule, Mapping):
            self.schedule = schedule_from_dict(schedule)
        elif schedule is not None:
            self.schedule = _parse_schedule(schedule)
        return super().from_dict(dic)

    def __eq__(self, other):
        if type(self) is not type(other):
            return False
        return self.to_dict() == other.to_dict()

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((type(self).__name__, self.hash()))

    def copy(self):
        return self.__class__().from_dict(self.to_dict())

    def __repr__(self):
        content = ', '.join(["{}={}".format(opt.field, getattr(self, opt.field)) for opt in list_options(self)])
        return "{}({})".format(self.__class__.__name__, content)


@UPDATERS.regist()
class Sgd(Updater):
    """Stochastic gradient descent with momentum."""

    _options = {
        'momentum': option('momentum', 'The momentum (default = 0.9).', display_order=2),
    }

    def __init__(self, learning_rate=0.001, schedule: Schedule = None, momentum=0.9):
        super().__init__(learning_rate=learning_rate, schedule=schedule)
        self.momentum = momentum

    def _create(self, params, lr) -> torch.optim.Optimizer:
        return torch.optim.SGD(params, lr=lr, momentum=self.momentum)

    def _read_group(self, group: Mapping):
        self.momentum = group['momentum']


@UPDATERS.regist()
class Adam(Updater):
    """Adam updater."""

    _options = {
        'beta1': option('beta1', 'The mean decay rate (default = 0.9).', display_order=2),
        'beta2': option('beta2', 'The variance decay rate (default = 0.999).', display_order=3),
        'epsilon': option('epsilon', 'The epsilon value (default = 1e-08).', display_order=4),
    }

    def __init__(self, learning_rate=0.001, schedule: Schedule = None, beta1=0.9, beta2=0.999, epsilon=1e-8):
        super().__init__(learning_rate=learning_rate, schedule=schedule)
        self.beta1 = beta1
        self.beta2 = beta2
        self.epsilon = epsilon

    def _create(self, params, lr) -> torch.optim.Optimizer:
        return torch.optim.Adam(params, lr=lr, betas=(self.beta1, self.beta2), eps=self.epsilon)

    def _read_group(self, group: Mapping):
        self.beta1, self.beta2 = group['betas']
        self.epsilon = group['eps']
