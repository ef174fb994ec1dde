"""Wochenplaner — Haupt-CLI.

Verwendung:
  python main.py init                          Default-Konfiguration anlegen
  python main.py config show                   Konfiguration anzeigen
  python main.py new                           Leeren Plan anlegen
  python main.py generate                      Beispielplan erzeugen
  python main.py generate --random --seed 7    Zufallsplan erzeugen
  python main.py book Monday 10:00 "Analysis"  Slot buchen (--length für Serien)
  python main.py unbook Monday 10:00           Buchung entfernen
  python main.py show                          Plan als Tabelle anzeigen
  python main.py html                          Plan als HTML schreiben
  python main.py export                        Excel + PDF exportieren
  python main.py validate                      Gespeicherten Plan prüfen
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich import box

from config.manager import ConfigManager
from config.schema import PlannerConfig
from data.plan_io import load_plan, save_plan
from models.clock_time import ClockTime
from models.errors import PlanLoadError, WeekPlanError
from models.week_plan import WeekPlan
from models.weekday import Weekday

console = Console()
logger = logging.getLogger(__name__)


def _setup_logging(config: PlannerConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.logging.level)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _abort(message: str) -> None:
    """Gibt die Meldung rot aus und beendet mit Exit-Code 1."""
    console.print(f"[red]{escape(message)}[/red]")
    sys.exit(1)


def _plan_path(config: PlannerConfig, plan_file: Optional[str]) -> Path:
    return Path(plan_file) if plan_file else Path(config.paths.plan_json)


def _load_plan_or_abort(path: Path) -> WeekPlan:
    """Lädt den Plan oder bricht mit Fehlermeldung ab."""
    if not path.exists():
        _abort(
            f"Keine Plan-Datei gefunden: {path}\n"
            "Legen Sie zunächst mit 'python main.py new' oder "
            "'python main.py generate' einen Plan an."
        )
    try:
        return load_plan(path)
    except PlanLoadError as e:
        _abort(f"Plan konnte nicht geladen werden:\n{e}")


def _parse_slot_or_abort(day: str, time: str) -> tuple[Weekday, ClockTime]:
    try:
        return Weekday.parse(day), ClockTime.parse(time)
    except ValueError as e:
        _abort(str(e))


plan_option = click.option(
    "--plan", "plan_file", default=None,
    help="Pfad zur Plan-Datei (Default aus der Konfiguration).",
)


# ─── INIT ─────────────────────────────────────────────────────────────────────

@click.command("init")
@click.option("--force", is_flag=True, default=False,
              help="Bestehende Konfiguration überschreiben.")
@click.pass_obj
def cmd_init(obj: dict, force: bool):
    """Legt die Default-Konfiguration als YAML an."""
    mgr: ConfigManager = obj["manager"]
    if not mgr.first_run_check() and not force:
        console.print(
            f"[yellow]Eine Konfiguration existiert bereits: {mgr.path}[/yellow]\n"
            "Mit [bold]--force[/bold] überschreiben."
        )
        return
    path = mgr.save(obj["config"])
    console.print(f"[green]✓[/green] Konfiguration gespeichert: {path}")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen."""


@cmd_config.command("show")
@click.pass_obj
def config_show(obj: dict):
    """Zeigt die aktuelle Konfiguration an."""
    config: PlannerConfig = obj["config"]
    grid = config.grid
    plan = grid.new_plan()

    console.print(Panel(
        f"[bold]{config.display.title}[/bold]  |  "
        f"Start {grid.start_time}  |  {grid.slots} × {grid.slot_duration} min  |  "
        f"Ende {plan.end_time()}",
        title="Wochenplaner",
        border_style="cyan",
    ))

    table = Table(title="Zeitraster", box=box.ROUNDED)
    table.add_column("Nr.")
    table.add_column("Beginn")
    table.add_column("Ende")
    for i, start in enumerate(plan.slot_times(), 1):
        table.add_row(str(i), str(start), str(start.add_minutes(grid.slot_duration)))
    console.print(table)

    console.print(f"[bold]Plan-Datei:[/bold] {config.paths.plan_json}")
    console.print(f"[bold]Log-Level:[/bold] {config.logging.level}")


# ─── NEW / GENERATE ───────────────────────────────────────────────────────────

@click.command("new")
@plan_option
@click.option("--force", is_flag=True, default=False,
              help="Bestehenden Plan überschreiben.")
@click.pass_obj
def cmd_new(obj: dict, plan_file: Optional[str], force: bool):
    """Legt einen leeren Plan mit dem konfigurierten Raster an."""
    config: PlannerConfig = obj["config"]
    path = _plan_path(config, plan_file)
    if path.exists() and not force:
        _abort(f"Plan-Datei existiert bereits: {path} (mit --force überschreiben)")
    save_plan(config.grid.new_plan(), path)
    console.print(f"[green]✓[/green] Leerer Plan gespeichert: {path}")


@click.command("generate")
@plan_option
@click.option("--random", "use_random", is_flag=True, default=False,
              help="Zufallsplan statt Beispielplan.")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Pläne.")
@click.option("--fill", default=0.5, type=click.FloatRange(0.0, 1.0),
              help="Anteil belegter Slots im Zufallsplan.")
@click.pass_obj
def cmd_generate(obj: dict, plan_file: Optional[str], use_random: bool,
                 seed: int, fill: float):
    """Erzeugt einen Beispiel- oder Zufallsplan und speichert ihn."""
    from data.sample_plan import RandomPlanGenerator, build_example_plan

    config: PlannerConfig = obj["config"]
    if use_random:
        plan = RandomPlanGenerator(config.grid, seed=seed, fill_ratio=fill).generate()
    else:
        plan = build_example_plan(config.grid)

    path = save_plan(plan, _plan_path(config, plan_file))
    console.print(f"[green]✓[/green] Plan gespeichert: {path} ({len(plan)} Buchungen)")


# ─── BOOK / UNBOOK ────────────────────────────────────────────────────────────

@click.command("book")
@click.argument("day")
@click.argument("time")
@click.argument("activity")
@click.option("--length", "-n", default=1, type=click.IntRange(min=1),
              help="Anzahl aufeinanderfolgender Slots.")
@plan_option
@click.pass_obj
def cmd_book(obj: dict, day: str, time: str, activity: str, length: int,
             plan_file: Optional[str]):
    """Bucht ACTIVITY am Tag DAY (z.B. Monday) ab Uhrzeit TIME (HH:MM)."""
    config: PlannerConfig = obj["config"]
    path = _plan_path(config, plan_file)
    plan = _load_plan_or_abort(path)
    weekday, start = _parse_slot_or_abort(day, time)

    try:
        plan.insert_range(weekday, start, length, activity)
    except WeekPlanError as e:
        # Datei bleibt unverändert, auch wenn ein Teil der Serie gepasst hätte
        _abort(f"Buchung fehlgeschlagen: {e}")

    save_plan(plan, path)
    console.print(
        f"[green]✓[/green] {weekday.value} {start}: '{activity}' "
        f"({length} Slot{'s' if length != 1 else ''}) gebucht"
    )


@click.command("unbook")
@click.argument("day")
@click.argument("time")
@plan_option
@click.pass_obj
def cmd_unbook(obj: dict, day: str, time: str, plan_file: Optional[str]):
    """Entfernt die Buchung am Tag DAY um Uhrzeit TIME."""
    config: PlannerConfig = obj["config"]
    path = _plan_path(config, plan_file)
    plan = _load_plan_or_abort(path)
    weekday, slot_time = _parse_slot_or_abort(day, time)

    try:
        removed = plan.remove(weekday, slot_time)
    except WeekPlanError as e:
        _abort(str(e))

    save_plan(plan, path)
    console.print(f"[green]✓[/green] {weekday.value} {slot_time}: '{removed}' entfernt")


# ─── SHOW / HTML / EXPORT ─────────────────────────────────────────────────────

@click.command("show")
@plan_option
@click.pass_obj
def cmd_show(obj: dict, plan_file: Optional[str]):
    """Zeigt den Plan als Tabelle im Terminal."""
    from export.tui_renderer import render_rich_table

    config: PlannerConfig = obj["config"]
    plan = _load_plan_or_abort(_plan_path(config, plan_file))
    display = config.display
    console.print(render_rich_table(
        plan.to_table(),
        day_labels=display.day_labels,
        title=display.title,
        empty_text=display.empty_cell,
        show_weekend=display.show_weekend,
    ))


@click.command("html")
@plan_option
@click.option("--output", "-o", default=None, help="Ausgabepfad (Default aus Config).")
@click.option("--stdout", "to_stdout", is_flag=True, default=False,
              help="Nur die Tabelle auf stdout ausgeben.")
@click.pass_obj
def cmd_html(obj: dict, plan_file: Optional[str], output: Optional[str], to_stdout: bool):
    """Schreibt den Plan als HTML-Seite."""
    from export.html_export import render_html, write_html

    config: PlannerConfig = obj["config"]
    plan = _load_plan_or_abort(_plan_path(config, plan_file))
    if to_stdout:
        click.echo(render_html(plan.to_table(), config.display.day_labels), nl=False)
        return
    out_path = write_html(
        plan.to_table(), Path(output or config.paths.html),
        title=config.display.title, day_labels=config.display.day_labels,
    )
    console.print(f"[green]✓[/green] HTML gespeichert: {out_path}")


@click.command("export")
@plan_option
@click.option("--xlsx/--no-xlsx", default=True, help="Excel-Datei erzeugen.")
@click.option("--pdf/--no-pdf", default=True, help="PDF-Datei erzeugen.")
@click.pass_obj
def cmd_export(obj: dict, plan_file: Optional[str], xlsx: bool, pdf: bool):
    """Exportiert den Plan als Excel und PDF."""
    from export import ExcelExporter, PdfExporter

    config: PlannerConfig = obj["config"]
    plan = _load_plan_or_abort(_plan_path(config, plan_file))
    table = plan.to_table()

    if xlsx:
        path = ExcelExporter(table, config.display).export(Path(config.paths.xlsx))
        console.print(f"[green]✓[/green] Excel gespeichert: {path}")
    if pdf:
        path = PdfExporter(table, config.display).export(Path(config.paths.pdf))
        console.print(f"[green]✓[/green] PDF gespeichert: {path}")


# ─── VALIDATE ─────────────────────────────────────────────────────────────────

@click.command("validate")
@plan_option
@click.pass_obj
def cmd_validate(obj: dict, plan_file: Optional[str]):
    """Lädt den Plan neu und prüft dabei jede Buchung."""
    config: PlannerConfig = obj["config"]
    path = _plan_path(config, plan_file)
    console.print(f"[bold]Prüfe Plan:[/bold] {path}")
    plan = _load_plan_or_abort(path)

    total = plan.slots * len(Weekday.ordered())
    console.print(Panel(
        f"[bold green]✓ GÜLTIG[/bold green]\n"
        f"Raster: {plan.start}–{plan.end_time()}, "
        f"{plan.slots} × {plan.slot_duration} min\n"
        f"Buchungen: {len(plan)} von {total} Slots",
        title="Plan-Check",
        border_style="cyan",
    ))


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--config", "config_path", default=None,
              help="Pfad zur YAML-Konfiguration.")
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Ausführliche Log-Ausgabe (DEBUG).")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], verbose: bool):
    """Wochenplaner: wiederkehrender Wochenplan aus festen Zeitslots.

    Starten Sie mit: python main.py generate
    """
    mgr = ConfigManager(Path(config_path) if config_path else None)
    try:
        # Defaults nur für den impliziten Pfad, ein expliziter muss existieren
        config = mgr.load() if config_path else mgr.load_or_default()
    except (FileNotFoundError, ValueError) as e:
        _abort(str(e))
    _setup_logging(config, verbose)
    ctx.obj = {"manager": mgr, "config": config}


def main():
    """Einstiegspunkt."""
    cli()


# Befehle registrieren
cli.add_command(cmd_init)
cli.add_command(cmd_config)
cli.add_command(cmd_new)
cli.add_command(cmd_generate)
cli.add_command(cmd_book)
cli.add_command(cmd_unbook)
cli.add_command(cmd_show)
cli.add_command(cmd_html)
cli.add_command(cmd_export)
cli.add_command(cmd_validate)


if __name__ == "__main__":
    main()
