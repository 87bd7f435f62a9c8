"""Komenda: esys match — dopasowanie faktów do reguł "ЕСЛИ … ТО …"."""

from __future__ import annotations

import argparse
import json
import pathlib

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from data_model import FactSet, ParsedRule, RulesLoadError
from matcher import (
    MatchResult,
    evaluate,
    load_facts_json,
    load_text_rules,
    parse_fact_arg,
)

console = Console(width=200)

SESSION_HELP = (
    "klucz=wartość — dodaj/nadpisz fakt   "
    ":run — wykonaj   :result — ostatni wynik   :facts — fakty   "
    ":clear — wyczyść fakty   :reset — wyczyść wynik   :quit — koniec"
)


# ---------------------------------------------------------------------------
# Wyświetlanie
# ---------------------------------------------------------------------------

def _show_facts(facts: FactSet) -> None:
    if not facts:
        console.print("[dim](brak faktów)[/dim]")
        return
    for fact in facts:
        console.print(f"  [cyan]{escape(fact.key)}[/cyan] = {escape(fact.value)}")


def _show_result(result: MatchResult) -> None:
    if not result.matched:
        console.print(f"[yellow]{result.display_lines()[0]}[/yellow]")
        return

    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", show_header=True)
    table.add_column("ID",    style="bold", no_wrap=True)
    table.add_column("AKCJA", no_wrap=False)
    for rule, action in zip(result.fired, result.actions):
        table.add_row("" if rule.id is None else str(rule.id), Text(action))
    console.print(table)
    console.print(f"  [dim]{len(result.actions)} akcji[/dim]")


def _result_json(result: MatchResult, facts: FactSet) -> str:
    out = {
        "matched": result.matched,
        "actions": list(result.actions),
        "rule_ids": [r.id for r in result.fired],
        "facts": facts.as_dict(),
    }
    return json.dumps(out, ensure_ascii=False, indent=2)


# ---------------------------------------------------------------------------
# Sesja interaktywna
# ---------------------------------------------------------------------------

def run_session(rules: list[ParsedRule], facts: FactSet) -> None:
    """
    Pętla formularza: dodawanie faktów, wykonanie, czyszczenie.

    Fakty i wynik żyją tylko w tej pętli.
    """
    console.print(f"[dim]{SESSION_HELP}[/dim]")
    result: MatchResult | None = None

    while True:
        try:
            line = Prompt.ask("[bold green]>[/bold green]", console=console).strip()
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        if not line:
            continue
        if line in (":quit", ":q"):
            break
        if line == ":facts":
            _show_facts(facts)
        elif line == ":clear":
            facts.clear()
            result = None
            console.print("[dim]Fakty i wynik wyczyszczone.[/dim]")
        elif line == ":result":
            if result is None:
                console.print("[dim](brak wyniku)[/dim]")
            else:
                _show_result(result)
        elif line == ":reset":
            result = None
            console.print("[dim]Wynik wyczyszczony.[/dim]")
        elif line == ":run":
            if not facts:
                console.print("[yellow]Dodaj co najmniej jeden fakt.[/yellow]")
                continue
            result = evaluate(rules, facts)
            _show_result(result)
        elif line.startswith(":"):
            console.print(f"[red]Nieznana komenda:[/red] {escape(line)}")
            console.print(f"[dim]{SESSION_HELP}[/dim]")
        else:
            try:
                fact = parse_fact_arg(line)
            except ValueError as e:
                console.print(f"[red]Błąd:[/red] {e}")
                continue
            replaced = fact.key in facts
            facts.add(fact)
            verb = "nadpisano" if replaced else "dodano"
            console.print(f"  [dim]{verb}:[/dim] [cyan]{escape(fact.key)}[/cyan] = {escape(fact.value)}")


# ---------------------------------------------------------------------------
# Główna logika
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    settings = args.settings
    rules_path    = pathlib.Path(args.rules) if args.rules else settings.match_rules
    strip_actions = args.strip_actions or settings.strip_actions

    # 1. Reguły; bez --strict błąd wczytania kończy się pustym zbiorem
    try:
        rules = load_text_rules(rules_path, strict=args.strict, strip_action=strip_actions)
    except RulesLoadError as e:
        console.print(f"[red]Błąd wczytywania reguł:[/red] {e}")
        raise SystemExit(1)

    if not rules and not args.json_output:
        console.print(f"[yellow]Brak reguł do dopasowania[/yellow] ({rules_path})")

    # 2. Fakty: najpierw plik, potem --fact (nadpisują klucze z pliku)
    facts = FactSet()
    if args.facts:
        try:
            facts = load_facts_json(pathlib.Path(args.facts))
        except RulesLoadError as e:
            console.print(f"[red]Błąd wczytywania faktów:[/red] {e}")
            raise SystemExit(1)

    for raw in args.fact or []:
        try:
            facts.add(parse_fact_arg(raw))
        except ValueError as e:
            console.print(f"[red]Błąd parsowania faktu:[/red] {e}")
            raise SystemExit(1)

    if args.interactive:
        run_session(rules, facts)
        return

    # 3. Ewaluacja
    result = evaluate(rules, facts)
    if args.json_output:
        print(_result_json(result, facts))
        return

    console.print(
        f"Reguły: [bold]{len(rules)}[/bold]  ({rules_path.name})   "
        f"Fakty: [bold]{len(facts)}[/bold]"
    )
    _show_result(result)


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "match",
        help="Dopasowuje fakty do reguł 'ЕСЛИ … ТО …' i wypisuje akcje.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wczytuje reguły z rules.json i wypisuje akcje reguł, których wszystkie
warunki są spełnione przez podane fakty.

Format pliku reguł:
  [{"ID": 1, "TextRule": "ЕСЛИ класс=воин И раса=дварф ТО боевой топор"}]

Format pliku faktów:
  [{"key": "класс", "value": "воин"}]  lub  {"facts": [...]}

Przykłady:
  esys match -f класс=воин -f раса=дварф
  esys match --facts postac.json --json
  esys match --rules moje-reguly.json --strict -f класс=маг
  esys match -i
        """,
    )
    p.add_argument(
        "--fact", "-f",
        metavar="KLUCZ=WARTOŚĆ",
        action="append",
        help="Fakt; można podać wielokrotnie (powtórzony klucz nadpisuje wartość).",
    )
    p.add_argument(
        "--facts",
        metavar="PLIK",
        help="Plik JSON z faktami.",
    )
    p.add_argument(
        "--rules", "-r",
        metavar="PLIK",
        help="Plik rules.json (domyślnie: ESYS_MATCH_RULES lub data/matcher/rules.json).",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        help="Błąd wczytania reguł kończy komendę (domyślnie: ostrzeżenie i pusty zbiór).",
    )
    p.add_argument(
        "--strip-actions",
        action="store_true",
        dest="strip_actions",
        help="Przycinaj białe znaki wokół tekstu akcji.",
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
        help="Sesja interaktywna: dodawanie faktów, wykonanie, czyszczenie.",
    )
    p.set_defaults(func=run)
