import logging
import os

import pytest
from pydantic import ValidationError

from multi_stopwatch.config import Settings, setupLogging

@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for name in ('POLL_INTERVAL', 'JOIN_TIMEOUT', 'LOG_FILE', 'LOG_LEVEL'):
        monkeypatch.delenv('STOPWATCH_' + name, raising=False)
    monkeypatch.chdir(tmp_path)

def test_defaults() -> None:
    s = Settings()
    assert s.poll_interval == 0.5
    assert s.join_timeout == 5.0
    assert s.log_file is None
    assert s.log_level == 'INFO'

def test_validation() -> None:
    with pytest.raises(ValidationError):
        Settings(poll_interval=0)
    with pytest.raises(ValidationError):
        Settings(join_timeout=-1)
    with pytest.raises(ValidationError):
        Settings(log_level='chatty')
    assert Settings(log_level='debug').log_level == 'DEBUG'
    assert Settings(join_timeout=None).join_timeout is None

def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('STOPWATCH_POLL_INTERVAL', '0.25')
    monkeypatch.setenv('STOPWATCH_LOG_LEVEL', 'warning')
    monkeypatch.setenv('STOPWATCH_LOG_FILE', '  ')
    s = Settings.fromEnv()
    assert s.poll_interval == 0.25
    assert s.log_level == 'WARNING'
    assert s.log_file is None

def test_from_env_file(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / 'stopwatch.env'
    env_file.write_text('STOPWATCH_JOIN_TIMEOUT=1.5\nSTOPWATCH_POLL_INTERVAL=2\n')
    monkeypatch.setenv('STOPWATCH_POLL_INTERVAL', '0.1')
    s = Settings.fromEnv(str(env_file))
    assert s.join_timeout == 1.5
    assert s.poll_interval == 0.1
    os.environ.pop('STOPWATCH_JOIN_TIMEOUT', None)   # set by the file, not by monkeypatch

def test_setup_logging_to_file(tmp_path) -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    log_file = tmp_path / 'stopwatch.log'
    setupLogging(Settings(log_file=str(log_file), log_level='DEBUG'))
    try:
        logging.getLogger('multi_stopwatch.test').debug('hello file')
        for h in root.handlers:
            h.flush()
        assert 'hello file' in log_file.read_text()
    finally:
        for h in root.handlers[:]:
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)

def test_from_env_finds_dotenv_in_cwd(tmp_path) -> None:
    # clean_env already chdir'd into tmp_path
    (tmp_path / '.env').write_text('STOPWATCH_POLL_INTERVAL=2.5\n')
    try:
        assert Settings.fromEnv().poll_interval == 2.5
    finally:
        os.environ.pop('STOPWATCH_POLL_INTERVAL', None)
