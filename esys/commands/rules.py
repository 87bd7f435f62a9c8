"""Komenda: esys rules — listowanie reguł dopasowania po zdekodowaniu."""

from __future__ import annotations

import argparse
import pathlib

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from data_model import MalformedRuleError, RulesLoadError
from matcher import load_text_records, parse_rule

console = Console(width=220)


def _fmt_conditions(rule, detail: bool) -> str:
    sep = "\n" if detail else " И "
    return sep.join(escape(str(c)) for c in rule.conditions)


def run(args: argparse.Namespace) -> None:
    settings   = args.settings
    rules_path = pathlib.Path(args.rules) if args.rules else settings.match_rules
    strip      = args.strip_actions or settings.strip_actions

    try:
        records = load_text_records(rules_path)
    except RulesLoadError as e:
        console.print(f"[red]Błąd wczytywania reguł:[/red] {e}")
        raise SystemExit(1)

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("ID",       no_wrap=True, style="bold")
    table.add_column("WARUNKI",  no_wrap=False, max_width=90)
    table.add_column("AKCJA",    no_wrap=False, max_width=60)

    skipped: list[tuple[object, str, str]] = []
    for record in records:
        try:
            rule = parse_rule(record.text, record.id, strip_action=strip)
        except MalformedRuleError as e:
            skipped.append((record.id, record.text, e.reason))
            continue
        if args.search and args.search.lower() not in record.text.lower():
            continue
        table.add_row(
            "" if rule.id is None else str(rule.id),
            _fmt_conditions(rule, detail=args.detail),
            Text(repr(rule.action) if args.raw else rule.action),
        )

    console.print()
    console.print(table)
    total = table.row_count
    console.print(f"  [dim]{total} reguł, {len(skipped)} pominiętych[/dim]\n")

    if args.skipped and skipped:
        console.print("[yellow]Pominięte (niezgodne ze wzorcem 'ЕСЛИ … ТО'):[/yellow]")
        for rule_id, text, reason in skipped:
            label = "—" if rule_id is None else rule_id
            console.print(f"  [bold]{label}[/bold]  {escape(text)}  [dim]({escape(reason)})[/dim]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "rules",
        help="Listuje reguły dopasowania (warunki i akcje po zdekodowaniu).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Dekoduje reguły "ЕСЛИ … И … ТО …" z rules.json i wyświetla je jako tabelę.

Przykłady:
  esys rules
  esys rules --search дварф
  esys rules --detail --raw
  esys rules --skipped
        """,
    )
    p.add_argument(
        "--rules", "-r",
        metavar="PLIK",
        help="Plik rules.json (domyślnie: ESYS_MATCH_RULES).",
    )
    p.add_argument(
        "--search", "-s",
        metavar="TEKST",
        help="Pokaż tylko reguły zawierające tekst (bez rozróżniania wielkości liter).",
    )
    p.add_argument(
        "--detail",
        action="store_true",
        help="Każdy warunek w osobnej linii.",
    )
    p.add_argument(
        "--raw",
        action="store_true",
        help="Pokaż akcję jako repr (widoczne wiodące spacje).",
    )
    p.add_argument(
        "--strip-actions",
        action="store_true",
        dest="strip_actions",
        help="Przycinaj białe znaki wokół tekstu akcji.",
    )
    p.add_argument(
        "--skipped",
        action="store_true",
        help="Wypisz też reguły pominięte przy dekodowaniu.",
    )
    p.set_defaults(func=run)
