"""Komenda: esys questions — grupy pytań agregatora z odpowiedziami."""

from __future__ import annotations

import argparse
import pathlib

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from scorer import group_by_question, load_initial_state, load_score_rules

console = Console(width=220)


def _fmt_delta(d: float) -> str:
    if d > 0:
        return f"[green]+{d:g}[/green]"
    if d < 0:
        return f"[red]{d:g}[/red]"
    return "[dim]0[/dim]"


def run(args: argparse.Namespace) -> None:
    settings   = args.settings
    state_path = pathlib.Path(args.state) if args.state else settings.initial_state
    rules_path = pathlib.Path(args.rules) if args.rules else settings.score_rules

    try:
        classes = load_initial_state(state_path)
        rules   = load_score_rules(rules_path, classes=classes)
    except ValueError as e:
        console.print(f"[red]Błąd wczytywania danych:[/red] {e}")
        raise SystemExit(1)

    groups = group_by_question(rules)
    if args.group is not None:
        groups = {g: opts for g, opts in groups.items() if g == args.group}

    if not groups:
        console.print("[yellow]Brak pytań spełniających kryteria.[/yellow]")
        return

    for group, options in groups.items():
        table = Table(
            title=f"Pytanie {group}",
            title_justify="left",
            box=box.SIMPLE_HEAD,
            header_style="bold white",
            show_header=True,
        )
        table.add_column("ID", style="bold", no_wrap=True)
        table.add_column("ODPOWIEDŹ", no_wrap=False, max_width=60)
        for cls in classes:
            table.add_column(escape(cls.name), justify="right", no_wrap=True)

        for rule in options:
            table.add_row(
                str(rule.id),
                escape(rule.text),
                *[_fmt_delta(d) for d in rule.deltas],
            )
        console.print(table)

    console.print(
        f"  [dim]{len(groups)} pytań, {sum(len(o) for o in groups.values())} odpowiedzi[/dim]\n"
    )


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "questions",
        help="Listuje grupy pytań agregatora z odpowiedziami i deltami.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wyświetla każdą grupę pytań z rules.json agregatora: ID reguły, treść
odpowiedzi i deltę dla każdej klasy z InitialState.json.

Przykłady:
  esys questions
  esys questions --group 2
        """,
    )
    p.add_argument(
        "--group", "-g",
        metavar="N",
        type=int,
        help="Pokaż tylko jedną grupę pytań.",
    )
    p.add_argument(
        "--rules", "-r",
        metavar="PLIK",
        help="Plik rules.json agregatora (domyślnie: ESYS_SCORE_RULES).",
    )
    p.add_argument(
        "--state", "-s",
        metavar="PLIK",
        help="Plik InitialState.json (domyślnie: ESYS_INITIAL_STATE).",
    )
    p.set_defaults(func=run)
