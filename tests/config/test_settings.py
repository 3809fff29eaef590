import pytest
from pydantic import ValidationError

from trainplan.config.settings import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ("LOG_LEVEL", "LOG_FILE", "LOG_JSON", "TEMP_ID_PREFIX", "COPY_NAME_SUFFIX", "STRICT_INVARIANTS"):
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the test
    monkeypatch.chdir(tmp_path)


def test_defaults():
    settings = Settings()
    assert settings.log_level == "INFO"
    assert settings.log_file is None
    assert settings.temp_id_prefix == "temp_"
    assert settings.copy_name_suffix == " (Copy)"
    assert settings.strict_invariants is True


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("TEMP_ID_PREFIX", "new-")
    monkeypatch.setenv("COPY_NAME_SUFFIX", " copy")
    monkeypatch.setenv("STRICT_INVARIANTS", "false")
    monkeypatch.setenv("LOG_JSON", "1")
    settings = Settings()
    assert settings.temp_id_prefix == "new-"
    assert settings.copy_name_suffix == " copy"
    assert settings.strict_invariants is False
    assert settings.log_json is True


def test_log_level_is_normalized(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert Settings().log_level == "DEBUG"


def test_unknown_log_level_falls_back(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    assert Settings().log_level == "INFO"


def test_env_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("TEMP_ID_PREFIX=draft_\n")
    assert Settings().temp_id_prefix == "draft_"


def test_empty_temp_prefix_rejected(monkeypatch):
    monkeypatch.setenv("TEMP_ID_PREFIX", "")
    with pytest.raises(ValidationError):
        Settings()
