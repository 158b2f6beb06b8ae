"""
Self-describing options.

Every configurable class declares a table of `OptionMetadata`, one entry per user-facing field::

    class ExponentialSchedule(Schedule):
        _options = {
            'gamma': option('gamma', 'The gamma value (default = 0.99).', display_order=2),
        }

Tables are merged down the class hierarchy by `OptionMerge`, so a subclass only declares its own fields. The
functions of this module drive any such class from the command line in the `-name value` convention::

    set_options(schedule, ['-gamma', '0.95', '-schedule_type', 'epoch'])
    get_options(schedule)  # ['-initial_value', '0.1', '-schedule_type', 'epoch', '-gamma', '0.95']
"""
import enum
import shlex
from dataclasses import dataclass
from typing import Any, Callable, List, Sequence, Union

from decaylr.utils.logger import get_global_logger
from .raises import MalformedOptionError, UnknownOptionError

__all__ = ['OptionMetadata', 'option', 'list_options', 'get_options', 'set_options', 'convert_option',
           'describe_options']


def _format_value(value) -> str:
    """to str"""
    if isinstance(value, enum.Enum):
        return str(value.value)
    return str(value)


_METAVARS = {float: 'double'}


@dataclass(frozen=True)
class OptionMetadata:
    """
    Describes one configurable field.

    Attributes:
        field: attribute name on the configured object.
        display_name: short name shown to users.
        description: human readable description, states the default value.
        cli_name: flag name without the leading dash.
        synopsis: flag syntax, e.g. `-gamma <double>`.
        display_order: position of the option when listed, shared fields of a base class come first.
        parser: converts the flag value from a string.
        formatter: converts the current value back to a string for `get_options`.
    """
    field: str
    display_name: str
    description: str
    cli_name: str
    synopsis: str
    display_order: int
    parser: Callable[[str], Any] = float
    formatter: Callable[[Any], str] = _format_value

    @property
    def flag(self) -> str:
        return f'-{self.cli_name}'


def option(field: str, description: str, display_order: int, parser: Callable[[str], Any] = float,
           formatter: Callable[[Any], str] = _format_value, cli_name: str = None, display_name: str = None,
           metavar: str = None) -> OptionMetadata:
    """
    Shortcut to build an `OptionMetadata`.

    `cli_name` and `display_name` default to `field`, the synopsis is `-<cli_name> <metavar>` where `metavar`
    defaults to the parser's name (`int`, ...), `double` for `float` values.
    """
    if cli_name is None:
        cli_name = field
    if display_name is None:
        display_name = field
    if metavar is None:
        metavar = _METAVARS.get(parser, getattr(parser, '__name__', 'value'))
    return OptionMetadata(field=field,
                          display_name=display_name,
                          description=description,
                          cli_name=cli_name,
                          synopsis=f'-{cli_name} <{metavar}>',
                          display_order=display_order,
                          parser=parser,
                          formatter=formatter)


def _options_of(obj) -> dict:
    cls = obj if isinstance(obj, type) else type(obj)
    return getattr(cls, '_options', {})


def list_options(obj) -> List[OptionMetadata]:
    """
    Returns the options of a class or an instance, sorted by display order.

    Args:
        obj: a configurable class or one of its instances.

    Returns:
        A list of `OptionMetadata`.
    """
    return sorted(_options_of(obj).values(), key=lambda opt: opt.display_order)


def get_options(obj) -> List[str]:
    """
    Gets the current settings of `obj`.

    Returns:
        an array of strings suitable for passing to `set_options`
    """
    res = []
    for opt in list_options(obj):
        res.extend([opt.flag, opt.formatter(getattr(obj, opt.field))])
    return res


def set_options(obj, argv: Union[str, Sequence[str]]):
    """
    Parses a given list of options and assigns them to `obj`.

    Flags that are not present leave their field unchanged. All values are parsed before any field is assigned,
    so a rejected list leaves `obj` untouched.

    Args:
        obj: the object to configure.
        argv: a list like `['-gamma', '0.9']`, or the same as a single string.

    Returns:
        `obj`

    Raises:
        UnknownOptionError: if a flag is not declared by the class of `obj`.
        MalformedOptionError: if a flag has no value or its value cannot be parsed.
    """
    if isinstance(argv, str):
        argv = shlex.split(argv)
    argv = list(argv)

    by_flag = {opt.cli_name: opt for opt in _options_of(obj).values()}
    parsed = []
    i = 0
    while i < len(argv):
        token = argv[i]
        name = token.lstrip('-')
        if not token.startswith('-') or name not in by_flag:
            raise UnknownOptionError(f"Illegal option '{token}' for {type(obj).__name__}, "
                                     f"supported: {[opt.flag for opt in list_options(obj)]}")
        opt = by_flag[name]
        if i + 1 >= len(argv):
            raise MalformedOptionError(f"No value given for option '{token}', expected {opt.synopsis}")
        raw = argv[i + 1]
        try:
            value = opt.parser(raw)
        except (ValueError, TypeError) as e:
            raise MalformedOptionError(f"Can't parse value '{raw}' of option '{token}', expected {opt.synopsis}") from e
        parsed.append((opt.field, value))
        i += 2

    for field, value in parsed:
        setattr(obj, field, value)

    if len(parsed) > 0:
        get_global_logger().debug(f'{type(obj).__name__} options set:', ', '.join(f'{k}={v}' for k, v in parsed))
    return obj


def convert_option(obj, field: str, value):
    """
    Normalize a value assigned to `field` of `obj` through the parser of its option, so that `1`, `1.0` and `'1'`
    are stored alike.

    Raises:
        UnknownOptionError: if `field` is not declared by the class of `obj`.
        MalformedOptionError: if the parser rejects `value`.
    """
    opt = _options_of(obj).get(field, None)
    if opt is None:
        raise UnknownOptionError(f"{type(obj).__name__} has no field '{field}', "
                                 f"supported: {[opt.field for opt in list_options(obj)]}")
    try:
        return opt.parser(value)
    except (ValueError, TypeError) as e:
        raise MalformedOptionError(f"Can't assign {value!r} to '{field}', expected {opt.synopsis}") from e


def describe_options(obj) -> str:
    """Render the options of a class or an instance as a help text."""
    lines = []
    for opt in list_options(obj):
        lines.append(f'\t{opt.synopsis}')
        lines.append(f'\t\t{opt.description}')
    return '\n'.join(lines)
