import json
import os.path
import sys
from pathlib import Path
from typing import Any, Mapping

import fire
from joblib import hash
from omegaconf import DictConfig, OmegaConf, DictKeyType
from omegaconf._utils import _ensure_container

from decaylr.utils.logger import get_global_logger

__all__ = ['BaseParams']


class BaseParams(DictConfig):
    """
    A dictionary-like configuration object with attribute access, used as the base of every schedule and updater.

    Values live in the DictConfig content and take part in `to_dict()`, hashing and serialization. Anything a
    subclass keeps in `self.__dict__` (caches, nested objects) does not.

    Every way of filling a configuration, `from_dict`, `from_json`, `from_yaml` and `from_args`, ends in
    `from_dict`, so a subclass that checks or normalizes its keys in `_convert` (or overrides `from_dict`) gets the
    same treatment from files and command lines::

        schedule = ExponentialSchedule().from_args(['--gamma=0.5', '--schedule_type=iteration'])
        schedule.to_yaml('schedule.yaml')
        ExponentialSchedule().from_yaml('schedule.yaml') == schedule
    """

    def __init__(self):
        super().__init__({}, flags={'no_deepcopy_set_nodes': True})
        self.__dict__["_prop"] = {}

    def __setattr__(self, key: str, value: Any) -> None:
        """
        Properties declared on the class are honored, other keys are converted by `_convert` and stored
        in the config content.
        """
        if isinstance(getattr(type(self), key, None), property):
            object.__setattr__(self, key, value)
            return
        if key != '_prop':
            value = self._convert(key, value)
        super().__setattr__(key, value)

    def __setitem__(self, key: DictKeyType, value: Any) -> None:
        if isinstance(key, str) and isinstance(getattr(type(self), key, None), property):
            object.__setattr__(self, key, value)
            return
        if key != '_prop':
            value = self._convert(key, value)
        super().__setitem__(key, value)

    def _convert(self, key, value):
        """Hook to check and normalize a value before it is stored, returns `value` unchanged by default."""
        return value

    def __repr__(self):
        content = ', '.join(["{}={}".format(k, v) for k, v in self.items()])
        return "{}({})".format(self.__class__.__name__, content)

    def copy(self):
        """
        Returns a configuration of the same class with equal content.
        """
        return self.__class__().from_dict(self.to_dict())

    def from_dict(self, dic: Mapping):
        """
        Assign every key of `dic`.

        Args:
            dic: a mapping of field names to values.

        Returns:
            updated `self` object
        """
        for k, v in dic.items():
            self[k] = v
        return self

    def from_kwargs(self, **kwargs):
        """
        Update the config object from keyword arguments.

        Returns:
            updated `self` object
        """
        return self.from_dict(kwargs)

    def from_json(self, file):
        """
        Update the config object from a JSON file holding an object.

        Args:
            file: path to the JSON file

        Returns:
            updated `self` object
        """
        return self.from_dict(json.loads(Path(file).read_text(encoding='utf-8')))

    def from_yaml(self, file):
        """
        Update the config object from a YAML file holding a mapping.

        Args:
            file: path to the YAML file

        Returns:
            updated `self` object
        """
        return self.from_dict(OmegaConf.to_container(OmegaConf.load(file), resolve=True))

    def from_file(self, file):
        """
        Update the config object from a `.json`, `.yaml` or `.yml` file.

        Raises:
            ValueError: if the suffix is none of these.
        """
        file = str(file)
        if file.endswith('.yaml') or file.endswith('.yml'):
            return self.from_yaml(file)
        if file.endswith('.json'):
            return self.from_json(file)
        raise ValueError(f'Unsupported config file {file}, expected .json, .yaml or .yml')

    def from_args(self, argv: list = None):
        """
        Update the config object from `--key=value` command line arguments.

        `--config=a.yaml,b.json` (or `-c`) loads the given files first, then the remaining keys are applied.
        Config files that do not exist are skipped with a warning.

        Args:
            argv: list of command line arguments (default: sys.argv[1:])

        Returns:
            updated `self` object
        """
        if argv is None:
            argv = sys.argv[1:]

        def func(**kwargs):
            """function to process arg list"""
            config = kwargs.pop('config', None)
            if config is None:
                config = kwargs.pop('c', None)

            if config is not None:
                if isinstance(config, str):
                    config = config.split(',')
                for config_fn in config:
                    if not os.path.exists(config_fn):
                        get_global_logger().warn(f'Config file {config_fn} not found, skipped.')
                        continue
                    self.from_file(config_fn)

            self.from_dict(kwargs)

        fire.Fire(func, command=list(argv))
        return self

    def to_dict(self):
        """
        Convert this configuration to a plain dict, enums as their values.
        """
        cfg = _ensure_container(self)
        return OmegaConf.to_container(cfg, resolve=False, enum_to_str=True)

    def to_json(self, file=None):
        """
        Convert this configuration to a JSON string.

        Args:
            file (str or Path, optional): If specified, the JSON string will be written to a file at the given path.

        Returns:
            str or None: The JSON string, or None if file is specified.
        """
        info = json.dumps(self.to_dict(), ensure_ascii=False, indent=2)
        if file is None:
            return info
        Path(file).write_text(info, encoding='utf-8')

    def to_yaml(self, file=None):
        """
        Convert this configuration to a YAML string.

        Args:
            file (str or Path, optional): If specified, the YAML string will be written to a file at the given path.

        Returns:
            str or None: The YAML string, or None if file is specified.
        """
        info = OmegaConf.to_yaml(OmegaConf.create(self.to_dict()))
        if file is None:
            return info
        Path(file).write_text(info, encoding='utf-8')

    def __hash__(self):
        return int(self.hash(), 16)

    def hash(self) -> str:
        """
        Content hash of `to_dict()`.

        Returns:
            str: The hex digest.
        """
        return hash(self.to_dict())
