from .params import BaseParams
from .enums import ScheduleType
from .options import OptionMetadata, option, list_options, get_options, set_options, convert_option, describe_options
from .raises import UnrecognizedBackendValue, OptionError, UnknownOptionError, MalformedOptionError
