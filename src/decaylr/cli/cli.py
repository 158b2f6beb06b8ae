import fire

from decaylr.core.options import describe_options
from decaylr.schedules import available_schedules, get_schedule_class, from_spec, to_spec

doc = """
Usage:
# list the available schedules
decaylr list

# print the options of a schedule
decaylr options ExponentialSchedule

# normalize a specification, filling in default values
decaylr spec "ExponentialSchedule -gamma 0.5"

# print the learning rate of the first steps
decaylr values "ExponentialSchedule -initial_value 1 -gamma 0.5" --steps=5
"""


def list_schedules():
    """
    list the available schedules
        decaylr list
    """
    for name in available_schedules():
        print(name)


def options(name):
    """
    print the options of a schedule
        decaylr options <name>

    Args:
        name: class name of the schedule
    """
    print(name)
    print(describe_options(get_schedule_class(name)))


def spec(specification):
    """
    print a specification with every option filled in
        decaylr spec "<name> [-flag value ...]"
    """
    print(to_spec(from_spec(specification)))


def values(specification, steps=10):
    """
    print the learning rate of the first steps, one `step value` pair per line
        decaylr values "<name> [-flag value ...]" --steps=10

    Both the iteration and the epoch counter equal the step, so the output does not depend on the schedule type.
    """
    backend = from_spec(specification).initialize_backend()
    for i in range(int(steps)):
        print(f'{i}\t{backend.value_at(i, i)}')


def main():
    """the entry"""
    fire.Fire({
        'list': list_schedules,
        'options': options,
        'spec': spec,
        'values': values,
    })
