"""
Backend schedule values.

A backend schedule is an immutable value describing a decay policy. It is what an optimizer consumes during
training: `value_at(iteration, epoch)` returns the learning rate for the current position, `apply()` writes it into
the `param_groups` of a torch optimizer and `lr_lambda()` wraps it into a `torch.optim.lr_scheduler.LambdaLR`.

Every value carries a `schedule_type` that selects which counter is used as the step `i` of its formula::

    ScheduleType.ITERATION -> i = iteration
    ScheduleType.EPOCH     -> i = epoch

Workbench-side configuration objects live in `decaylr.schedules`; they build these values and can be resynchronized
from them.
"""
import enum
from dataclasses import dataclass

import numpy as np
from torch.optim.lr_scheduler import LambdaLR

__all__ = ['ScheduleType',
           'ISchedule',
           'FixedSchedule',
           'ExponentialSchedule',
           'StepSchedule',
           'PolySchedule',
           'InverseSchedule',
           'SigmoidSchedule', ]


class ScheduleType(enum.Enum):
    """Which training counter drives a backend schedule."""
    ITERATION = 0
    EPOCH = 1


@dataclass(frozen=True)
class ISchedule:
    """Base class of all backend schedule values."""
    schedule_type: ScheduleType
    initial_value: float

    def step_of(self, iteration, epoch):
        """Return the counter selected by `schedule_type`."""
        if self.schedule_type == ScheduleType.ITERATION:
            return iteration
        return epoch

    def interp(self, i):
        """Rate at step `i`. Must be implemented in a subclass."""
        raise NotImplementedError()

    def value_at(self, iteration, epoch) -> float:
        """
        Return the learning rate at the given position of training.

        Args:
            iteration: number of optimizer steps done so far.
            epoch: number of full passes over the data done so far.

        Returns:
            The scheduled learning rate as a python float.
        """
        return float(self.interp(self.step_of(iteration, epoch)))

    def __call__(self, iteration, epoch=0):
        return self.value_at(iteration, epoch)

    def apply(self, optimizer, iteration, epoch):
        """
        Write the scheduled learning rate into every param group of `optimizer`.

        Args:
            optimizer: A PyTorch optimizer instance.
            iteration: number of optimizer steps done so far.
            epoch: number of full passes over the data done so far.

        Returns:
            The new learning rate.
        """
        new_lr = self.value_at(iteration, epoch)
        for param_group in optimizer.param_groups:  # type:dict
            param_group['lr'] = new_lr
        return new_lr

    def lr_lambda(self, optimizer, last_epoch=-1) -> LambdaLR:
        """
        Wrap this value into a `LambdaLR`.

        The scheduler multiplies the optimizer's base rate by `value_at(i) / initial_value`, where `i` is the number
        of `scheduler.step()` calls. Call `step()` once per iteration or once per epoch, matching `schedule_type`.

        Notes:
            With a zero `initial_value` the ratio is undefined; the factor is 0 in that case.
        """

        def factor(i):
            if self.initial_value == 0:
                return 0.
            return float(self.interp(i)) / self.initial_value

        return LambdaLR(optimizer, lr_lambda=factor, last_epoch=last_epoch)


@dataclass(frozen=True)
class FixedSchedule(ISchedule):
    r"""
    A schedule that never changes
                |
    value       |--------------
                |
                |________________
    """

    def interp(self, i):
        return self.initial_value


@dataclass(frozen=True)
class ExponentialSchedule(ISchedule):
    """value = initial_value * gamma ^ i"""
    gamma: float = 0.99

    def interp(self, i):
        return self.initial_value * np.power(self.gamma, i)


@dataclass(frozen=True)
class StepSchedule(ISchedule):
    """
    equal to tf.train.exponential_decay with staircase, decay every <step> with a base of <decay_rate>

    Division follows IEEE rules: with step=0 the exponent is inf from i=1 on and nan at i=0.
    """
    decay_rate: float = 0.1
    step: float = 1.

    def interp(self, i):
        with np.errstate(divide='ignore', invalid='ignore'):
            return self.initial_value * np.power(self.decay_rate, np.floor(np.divide(i, self.step)))


@dataclass(frozen=True)
class PolySchedule(ISchedule):
    r"""
    polynomial decay to zero at <max_iter>, constant zero afterwards

    initial_value |*
                  |   *
                  |       *
                  |            *
               0  +-----------------*------->
                                 max_iter
    """
    power: float = 1.
    max_iter: int = 100

    def interp(self, i):
        # max_iter <= 0: decayed from the start
        ratio = 1. if i >= self.max_iter else i / self.max_iter
        return self.initial_value * np.power(1 - ratio, self.power)


@dataclass(frozen=True)
class InverseSchedule(ISchedule):
    """value = initial_value / (1 + gamma * i) ^ power"""
    gamma: float = 0.99
    power: float = 1.

    def interp(self, i):
        return self.initial_value / np.power(1 + self.gamma * i, self.power)


@dataclass(frozen=True)
class SigmoidSchedule(ISchedule):
    """value = initial_value / (1 + exp(-gamma * (i - step_size)))"""
    gamma: float = 0.99
    step_size: int = 1

    def interp(self, i):
        return self.initial_value / (1 + np.exp(-self.gamma * (i - self.step_size)))
