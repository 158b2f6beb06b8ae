import json

import pytest

from decaylr.proc import config
from decaylr.proc.config import get_config, get_env_config, get_runtime_config, GLOBAL_DEFAULT


def test_get_config(tmp_path):
    fn = tmp_path / 'rc.json'
    assert get_config(str(fn), {'a': 1}) == {'a': 1}
    assert get_config(None, {}) == {}

    fn.write_text(json.dumps({'log_verbose': 10}))
    assert get_config(str(fn), {}) == {'log_verbose': 10}

    fn.write_text('[1, 2]')
    with pytest.raises(ValueError):
        get_config(str(fn), {})


def test_env_config():
    res = get_env_config({'DECAYLR_LOG_VERBOSE': '10',
                          'DECAYLR_LOG_DIR': '/tmp/logs',
                          'HOME': '/root'})
    assert res == {'log_verbose': 10, 'log_dir': '/tmp/logs'}


def test_runtime_config(tmp_path, monkeypatch):
    fn = tmp_path / 'rc.json'
    fn.write_text(json.dumps({'log_verbose': 30, 'log_dir': 'a'}))
    monkeypatch.setattr(config, 'global_config_path', lambda: str(fn))
    monkeypatch.setenv('DECAYLR_LOG_DIR', 'b')

    res = get_runtime_config()
    assert res['log_verbose'] == 30
    assert res['log_dir'] == 'b'
    assert set(GLOBAL_DEFAULT).issubset(res)
