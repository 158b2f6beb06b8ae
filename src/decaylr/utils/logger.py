"""
used for logging
"""

import logging
import os
import sys
from collections import namedtuple
from datetime import datetime
from typing import Any, Callable

from decaylr.proc.config import glob

loginfo = namedtuple('loginfo', ['string', 'prefix_len'])

logger = None

VV_DEBUG = 0
V_DEBUG = 10
V_INFO = 20
V_WARN = 30
V_ERROR = 40
V_FATAL = 50

_LEVEL_NAMES = {
    'vv_debug': VV_DEBUG,
    'debug': V_DEBUG,
    'info': V_INFO,
    'warn': V_WARN,
    'error': V_ERROR,
    'fatal': V_FATAL,
}


def parse_verbose(value):
    """
    Reads a `log_verbose` setting, either a level number (`10`, `'10'`) or a level name (`'debug'`).

    Returns:
        The level number, or None if `value` is neither.
    """
    if isinstance(value, int):
        return value
    value = str(value).strip().lower()
    if value.isdigit():
        return int(value)
    return _LEVEL_NAMES.get(value, None)


_config_verbose = parse_verbose(glob.get('log_verbose', V_INFO))


def get_global_logger():
    global logger
    if logger is None:
        logger = Logger()
    return logger


class Logger:
    VERBOSE = V_INFO if _config_verbose is None else _config_verbose
    VV_DEBUG = VV_DEBUG
    V_DEBUG = V_DEBUG
    V_INFO = V_INFO
    V_WARN = V_WARN
    V_ERROR = V_ERROR
    V_FATAL = V_FATAL
    _instance = None

    def __new__(cls, *args, **kwargs) -> Any:
        if Logger._instance is not None:
            return Logger._instance
        return super().__new__(cls)

    def __init__(self, adddate=True, datefmt: str = '%y-%m-%d %H:%M:%S', sep: str = " | ",
                 use_stdout: bool = True):
        if Logger._instance is not None:
            return

        self.adddate = adddate
        self.datefmt = datefmt
        self.out_channel = []
        self.pipe_key = set()
        self.sep = sep
        self.listener = []
        self.use_stdout = use_stdout
        Logger._instance = self

        log_dir = glob.get('log_dir', None)
        if log_dir:
            self.add_log_dir(log_dir)
        if _config_verbose is None:
            self.warn(f"Unrecognized log_verbose {glob['log_verbose']!r}, expected a number or one of "
                      f"{list(_LEVEL_NAMES)}; using info.")

    def _format(self, *values, raw=False, level=V_INFO):
        """"""
        if level < Logger.VERBOSE:
            return None

        if self.adddate and not raw:
            cur_date = datetime.now().strftime(self.datefmt)
        else:
            cur_date = ""

        values = ["{}".format(str(i)) for i in values]
        values = [i for i in values if len(i.strip()) != 0]

        if len(cur_date) == 0:
            space = values
        else:
            space = [cur_date, *values]

        return loginfo("{}\n".format(self.sep.join(space)), len(cur_date))

    def _handle(self, logstr, end="", level=10):
        """handle log string"""
        for listener in self.listener:
            listener(logstr, end, level)

        if level < Logger.VERBOSE:
            return
        file = sys.stdout
        if level > Logger.V_INFO:
            file = sys.stderr

        self.print(logstr, end=end, file=file)
        for i in self.out_channel:
            with open(i, "a", encoding="utf-8") as w:
                w.write(logstr)

    def _log(self, *values, raw=False, level=V_INFO):
        res = self._format(*values, raw=raw, level=level)
        if res is None:
            return
        self._handle(res.string, level=level)

    def info(self, *values):
        """Log a message with severity 'INFO'"""
        self._log(*values, level=V_INFO)

    def raw(self, *values, level=V_INFO):
        """Log a message with severity 'INFO' without datetime prefix"""
        self._log(*values, raw=True, level=level)

    def debug(self, *values):
        """Log a message with severity 'DEBUG'"""
        self._log("DEBUG", *values, level=V_DEBUG)

    def warn(self, *values):
        """Log a message with severity 'WARN'"""
        self._log("WARN", *values, level=V_WARN)

    def print(self, *args, end='\n', file=sys.stdout):
        """built-in print function"""
        if self.use_stdout:
            print(*args, end=end, flush=True, file=file)

    def add_log_dir(self, dir, fn=None):
        """add a file output pipeline"""
        if fn is None:
            fn = ''
        else:
            fn = f'{fn}.'

        if dir in self.pipe_key:
            self.info("Add pipe {}, but already exists".format(dir))
            return None

        os.makedirs(dir, exist_ok=True)

        i = 0
        cur_date = datetime.now().strftime("%y%m%d%H%M")

        fmt_str = "l.{fn}{i}.{cur_date}.log"

        def _get_fn():
            return fmt_str.format(fn=fn, i=i, cur_date=cur_date)

        fni = os.path.join(dir, _get_fn())
        while os.path.exists(fni):
            i += 1
            fni = os.path.join(dir, _get_fn())

        self.out_channel.append(fni)
        self.pipe_key.add(dir)
        return fni

    def add_log_listener(self, func: Callable[[str, str, int], Any]):
        """add a log event handler"""
        self.listener.append(func)

    def set_verbose(self, verbose=V_INFO):
        """set log verbose, default level is `INFO`"""
        Logger.VERBOSE = verbose
        logging.basicConfig(format='%(levelname)s:%(message)s', level=verbose)
