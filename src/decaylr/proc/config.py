import json
import os

__all__ = ['glob', 'global_config_path', 'get_runtime_config']

GLOBAL_DEFAULT = {
    'log_verbose': 20,
    'log_dir': None,
}

ENV_PREFIX = 'DECAYLR_'


def global_config_path():
    """
    Returns the path to the global configuration file.

    Returns:
        str: The path to the global configuration file.

    Notes:
        The relative path of global config path should never change (~/.decaylrrc.json)
    """
    return os.path.expanduser("~/.decaylrrc.json")


def get_config(path, default):
    """
    Reads the configuration file at the given path.

    Args:
        path (str): The path to the configuration file.
        default (dict): The configuration to use if the file doesn't exist.

    Returns:
        dict: The configuration read from the file or the default configuration if the file doesn't exist.

    Raises:
        ValueError: If the file exists but is not a json object.
    """
    if path is None or not os.path.exists(path):
        return default

    with open(path, encoding='utf-8') as r:
        config = json.load(r)
    if not isinstance(config, dict):
        raise ValueError(f'{path} should contain a json object, got {type(config).__name__}')
    return config


def get_env_config(environ=None):
    """
    Collects `DECAYLR_<KEY>` environment variables, e.g. `DECAYLR_LOG_VERBOSE=10` -> {'log_verbose': 10}.

    Values are decoded as json when possible and kept as strings otherwise.
    """
    if environ is None:
        environ = os.environ
    res = {}
    for k, v in environ.items():
        if not k.startswith(ENV_PREFIX):
            continue
        try:
            v = json.loads(v)
        except ValueError:
            pass
        res[k[len(ENV_PREFIX):].lower()] = v
    return res


def get_runtime_config():
    """
    Returns the runtime configuration by merging the defaults, the global config file and the environment.

    Returns:
        dict: The merged runtime configuration.
    """
    # default
    cfg = dict(GLOBAL_DEFAULT)

    # global config (~/.decaylrrc.json)
    cfg.update(get_config(global_config_path(), {}))

    # environment (DECAYLR_*)
    cfg.update(get_env_config())
    return cfg


# A dict object contains runtime configuration.
glob = get_runtime_config()
