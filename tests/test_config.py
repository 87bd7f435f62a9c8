import pytest

from esys._config import DATA_DIR, Settings


def test_defaults_point_at_bundled_data(tmp_path):
    settings = Settings.from_env(dotenv_path=tmp_path / "brak.env")

    assert settings.match_rules == DATA_DIR / "matcher" / "rules.json"
    assert settings.score_rules == DATA_DIR / "scorer" / "rules.json"
    assert settings.initial_state == DATA_DIR / "scorer" / "InitialState.json"
    assert settings.strip_actions is False
    assert settings.log_level == "WARNING"
    assert settings.match_rules.exists()


def test_dotenv_file_is_read(tmp_path):
    env = tmp_path / ".env"
    env.write_text(
        "ESYS_MATCH_RULES=/srv/esys/rules.json\n"
        "ESYS_STRIP_ACTIONS=yes\n"
        "ESYS_LOG_LEVEL=debug\n",
        encoding="utf-8",
    )
    settings = Settings.from_env(dotenv_path=env)

    assert str(settings.match_rules) == "/srv/esys/rules.json"
    assert settings.strip_actions is True
    assert settings.log_level == "DEBUG"


def test_environment_wins_over_dotenv(tmp_path, monkeypatch):
    env = tmp_path / ".env"
    env.write_text("ESYS_STRIP_ACTIONS=1\n", encoding="utf-8")
    monkeypatch.setenv("ESYS_STRIP_ACTIONS", "0")

    assert Settings.from_env(dotenv_path=env).strip_actions is False


def test_unknown_log_level_rejected(tmp_path, monkeypatch):
    monkeypatch.setenv("ESYS_LOG_LEVEL", "verbose")
    with pytest.raises(ValueError, match="VERBOSE"):
        Settings.from_env(dotenv_path=tmp_path / "brak.env")


def test_blank_log_level_falls_back_to_default(tmp_path, monkeypatch):
    monkeypatch.setenv("ESYS_LOG_LEVEL", "  ")
    assert Settings.from_env(dotenv_path=tmp_path / "brak.env").log_level == "WARNING"
