"""Konfiguracja CLI — zmienne środowiskowe, opcjonalnie z pliku .env."""

from __future__ import annotations

import logging
import os
import pathlib
from dataclasses import dataclass

from dotenv import load_dotenv

ROOT     = pathlib.Path(__file__).resolve().parent.parent
DATA_DIR = ROOT / "data"

_TRUE = {"1", "true", "yes", "on", "tak"}


def _env_path(name: str, default: pathlib.Path) -> pathlib.Path:
    value = os.getenv(name)
    return pathlib.Path(value) if value else default


def _env_level(name: str, default: str = "WARNING") -> str:
    value = (os.getenv(name) or "").strip().upper() or default
    if value not in logging.getLevelNamesMapping():
        raise ValueError(f"{name}: nieznany poziom logowania {value!r}")
    return value


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in _TRUE


@dataclass(frozen=True, slots=True)
class Settings:
    """
    Ustawienia odczytane ze środowiska.

    - match_rules:    ESYS_MATCH_RULES    (rules.json dopasowania faktów)
    - score_rules:    ESYS_SCORE_RULES    (rules.json agregatora)
    - initial_state:  ESYS_INITIAL_STATE  (InitialState.json)
    - strip_actions:  ESYS_STRIP_ACTIONS  (przycinanie tekstu akcji)
    - log_level:      ESYS_LOG_LEVEL      (poziom logowania; nieznana nazwa → ValueError)
    """
    match_rules:   pathlib.Path
    score_rules:   pathlib.Path
    initial_state: pathlib.Path
    strip_actions: bool = False
    log_level:     str = "WARNING"

    @classmethod
    def from_env(cls, dotenv_path: pathlib.Path | None = None) -> Settings:
        load_dotenv(dotenv_path or ROOT / ".env")
        return cls(
            match_rules   = _env_path("ESYS_MATCH_RULES",   DATA_DIR / "matcher" / "rules.json"),
            score_rules   = _env_path("ESYS_SCORE_RULES",   DATA_DIR / "scorer" / "rules.json"),
            initial_state = _env_path("ESYS_INITIAL_STATE", DATA_DIR / "scorer" / "InitialState.json"),
            strip_actions = _env_flag("ESYS_STRIP_ACTIONS"),
            log_level     = _env_level("ESYS_LOG_LEVEL"),
        )
