"""Komenda: esys score — ranking klas z wybranych odpowiedzi."""

from __future__ import annotations

import argparse
import json
import pathlib

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from data_model import ClassState, ScoreRule, SelectionSet
from scorer import (
    aggregate,
    format_probability,
    group_by_question,
    load_initial_state,
    load_score_rules,
)

console = Console(width=200)


# ---------------------------------------------------------------------------
# Wyświetlanie
# ---------------------------------------------------------------------------

def _show_selections(selections: SelectionSet) -> None:
    if not len(selections):
        console.print("[yellow]Nie wybrano żadnej odpowiedzi — ranking = stan bazowy.[/yellow]")
        return
    console.print("[bold]Wybrane odpowiedzi:[/bold]")
    for group, rule in sorted(selections.as_mapping().items()):
        console.print(f"  pytanie [cyan]{group}[/cyan]: [{rule.id}] {escape(rule.label)}")


def _show_ranking(ranking: list[ClassState], base_state: list[ClassState]) -> None:
    base = {c.id: c.probability for c in base_state}

    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", show_header=True)
    table.add_column("#",                  justify="right", no_wrap=True)
    table.add_column("KLASA",              style="bold cyan", no_wrap=True)
    table.add_column("PRAWDOPODOBIEŃSTWO", justify="right", no_wrap=True)
    table.add_column("ZMIANA",             justify="right", style="green", no_wrap=True)

    for place, cls in enumerate(ranking, start=1):
        gain = cls.probability - base[cls.id]
        table.add_row(
            str(place),
            escape(cls.name),
            format_probability(cls.probability),
            f"+{format_probability(gain)}" if gain > 0 else "",
        )
    console.print(table)


def _ranking_json(ranking: list[ClassState], selections: SelectionSet) -> str:
    out = {
        "selections": {str(g): r.id for g, r in sorted(selections.as_mapping().items())},
        "ranking": [
            {"id": c.id, "Name": c.name, "Probability": c.probability}
            for c in ranking
        ],
    }
    return json.dumps(out, ensure_ascii=False, indent=2)


# ---------------------------------------------------------------------------
# Wybór odpowiedzi
# ---------------------------------------------------------------------------

def _choose_interactive(rules: list[ScoreRule], selections: SelectionSet) -> None:
    """Jedno pytanie na grupę; pusta odpowiedź pomija grupę."""
    for group, options in group_by_question(rules).items():
        console.print(f"\n[bold]Pytanie {group}[/bold]")
        for rule in options:
            console.print(f"  [cyan]{rule.id:>3}[/cyan]  {escape(rule.text)}")

        current = selections.get(group)
        answer = Prompt.ask(
            "Wybierz ID (Enter — pomiń)",
            console=console,
            choices=[str(r.id) for r in options],
            show_choices=False,
            default=str(current.id) if current else "",
            show_default=current is not None,
        )
        if answer:
            selections.select(next(r for r in options if str(r.id) == answer))


def _choose_from_args(
    chosen_ids: list[int],
    rules:      list[ScoreRule],
    selections: SelectionSet,
    quiet:      bool = False,
) -> None:
    by_id = {r.id: r for r in rules}
    for rule_id in chosen_ids:
        rule = by_id.get(rule_id)
        if rule is None:
            console.print(f"[red]Nieznana reguła:[/red] {rule_id}")
            raise SystemExit(1)
        previous = selections.select(rule)
        if previous is not None and previous.id != rule.id and not quiet:
            console.print(
                f"[dim]Pytanie {rule.quest_group}: reguła {previous.id} "
                f"zastąpiona przez {rule.id}[/dim]"
            )


# ---------------------------------------------------------------------------
# Główna logika
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    settings   = args.settings
    state_path = pathlib.Path(args.state) if args.state else settings.initial_state
    rules_path = pathlib.Path(args.rules) if args.rules else settings.score_rules

    # 1. Stan bazowy i reguły (długości wektorów delt sprawdzane przy wczytaniu)
    try:
        base_state = load_initial_state(state_path)
        rules      = load_score_rules(rules_path, classes=base_state)
    except ValueError as e:
        console.print(f"[red]Błąd wczytywania danych:[/red] {e}")
        raise SystemExit(1)

    # 2. Wybór odpowiedzi
    selections = SelectionSet()
    _choose_from_args(args.choose or [], rules, selections, quiet=args.json_output)
    if args.interactive:
        _choose_interactive(rules, selections)

    # 3. Agregacja
    try:
        ranking = aggregate(base_state, selections)
    except ValueError as e:
        console.print(f"[red]Błąd agregacji:[/red] {e}")
        raise SystemExit(1)

    if args.json_output:
        print(_ranking_json(ranking, selections))
        return

    console.print(
        f"Klasy: [bold]{len(base_state)}[/bold]  ({state_path.name})   "
        f"Reguły: [bold]{len(rules)}[/bold]  ({rules_path.name})"
    )
    _show_selections(selections)
    _show_ranking(ranking, base_state)


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "score",
        help="Liczy ranking klas z wybranych odpowiedzi (jedna na grupę pytań).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wczytuje stan bazowy (InitialState.json) i reguły agregatora (rules.json),
dodaje dodatnie delty wybranych reguł do prawdopodobieństw klas i wypisuje
ranking malejąco. Z każdej grupy pytań liczy się jedna odpowiedź — późniejszy
wybór z tej samej grupy zastępuje wcześniejszy.

Format InitialState.json:
  [{"id": 1, "Name": "Воин", "Probability": 0.1}]

Format rules.json:
  [{"id": 1, "QuestID": 1, "Name": "Меч", "TextRule": "…", "Values": [0.3, 0.0]}]

Przykłady:
  esys score -c 1 -c 5
  esys score -c 1 -c 5 --json
  esys score --state stan.json --rules reguly.json -i
        """,
    )
    p.add_argument(
        "--choose", "-c",
        metavar="ID",
        type=int,
        action="append",
        help="ID wybranej reguły; można podać wielokrotnie.",
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
    p.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Wynik jako JSON na stdout.",
    )
    p.add_argument(
        "--interactive", "-i",
        action="store_true",
        help="Zadaj pytania po kolei i pozwól wybrać odpowiedź z każdej grupy.",
    )
    p.set_defaults(func=run)
