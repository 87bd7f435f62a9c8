"""
esys — narzędzie CLI systemu ekspertowego DnD.

Użycie:
  esys <komenda> [opcje]

Komendy:
  match       Dopasowuje fakty do reguł "ЕСЛИ … ТО …" i wypisuje akcje.
  score       Liczy ranking klas z wybranych odpowiedzi (grupy pytań).
  rules       Listuje reguły dopasowania po zdekodowaniu.
  questions   Listuje grupy pytań agregatora z odpowiedziami i deltami.

Zmienne środowiskowe (także z pliku .env):
  ESYS_MATCH_RULES, ESYS_SCORE_RULES, ESYS_INITIAL_STATE,
  ESYS_STRIP_ACTIONS, ESYS_LOG_LEVEL
"""

from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from esys import __version__
from esys._config import Settings
from esys.commands import match as cmd_match
from esys.commands import score as cmd_score
from esys.commands import rules as cmd_rules
from esys.commands import questions as cmd_questions

console = Console(width=200)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="esys",
        description="System ekspertowy DnD — narzędzie CLI.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"esys {__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Logowanie na poziomie DEBUG (np. pominięte reguły).",
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_match.add_parser(subparsers)
    cmd_score.add_parser(subparsers)
    cmd_rules.add_parser(subparsers)
    cmd_questions.add_parser(subparsers)

    return parser


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _force_utf8() -> None:
    # Windows: terminal może używać cp1252, wymuszamy UTF-8, żeby cyrylica
    # w regułach i polskie znaki w pomocy argparse były wypisywane poprawnie.
    for stream in (sys.stdout, sys.stderr):
        encoding = (getattr(stream, "encoding", None) or "").lower()
        if encoding != "utf-8" and hasattr(stream, "reconfigure"):
            stream.reconfigure(encoding="utf-8", errors="replace")


def main(argv: list[str] | None = None) -> None:
    _force_utf8()
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValueError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {escape(str(e))}")
        raise SystemExit(1)
    setup_logging("DEBUG" if args.verbose else settings.log_level)

    args.settings = settings
    args.func(args)


if __name__ == "__main__":
    main()
