from __future__ import annotations

import logging
import traceback
from pathlib import Path
from typing import Dict, List, Mapping, Optional

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from .config import load_settings, render_options, report_float_digits
from .geometry_def import load_geometry_def
from .metrics import MetricsTracker, Timer, use_tracker
from .pdf_writer import validate_page_count, write_document
from .pipeline import generate_lines
from .report import write_segments_csv


log = logging.getLogger(__name__)


class Logger:
    def __init__(self, verbose: bool) -> None:
        self.verbose = verbose
        theme = Theme({
            "info": "cyan",
            "step": "bold cyan",
            "warning": "bold yellow",
            "error": "bold red",
        })
        self.console = Console(theme=theme, highlight=False, record=False)
        self.err_console = Console(theme=theme, highlight=False, record=False, stderr=True)

    def _print(self, message: str, style: str | None = None, *, err: bool = False) -> None:
        target = self.err_console if err else self.console
        if style:
            target.print(f"[{style}]{escape(message)}[/{style}]")
        else:
            target.print(escape(message))

    def info(self, message: str) -> None:
        self._print(message, style="info")

    def step(self, message: str) -> None:
        self.console.print(f"[step]▶ {escape(message)}")

    def warn(self, message: str) -> None:
        self._print(message, style="warning")

    def error(self, message: str) -> None:
        self._print(message, style="error", err=True)

    def debug(self, message: str) -> None:
        if self.verbose:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def status(self, message: str):
        return self.console.status(message)


class _LoggingBridge(logging.Handler):
    def __init__(self, cli_logger: Logger, level: int) -> None:
        super().__init__(level)
        self._cli_logger = cli_logger

    def emit(self, record: logging.LogRecord) -> None:  # type: ignore[override]
        msg = self.format(record)
        if record.levelno >= logging.ERROR:
            self._cli_logger.error(msg)
        elif record.levelno >= logging.WARNING:
            self._cli_logger.warn(msg)
        elif record.levelno >= logging.INFO:
            self._cli_logger.info(msg)
        else:
            self._cli_logger.debug(msg)


def _install_bridge(logger: Logger, verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    package_logger = logging.getLogger("lined_paper_pdf")
    package_logger.setLevel(log_level)
    package_logger.propagate = False
    for handler in list(package_logger.handlers):
        if isinstance(handler, _LoggingBridge):
            package_logger.removeHandler(handler)
    bridge = _LoggingBridge(logger, log_level)
    bridge.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(bridge)


def _summarize(
    logger: Logger,
    tracker: MetricsTracker,
    outputs: Mapping[str, Path],
    page_count: int,
) -> None:
    counts = tracker.counts_with_prefix("segments")
    table = Table(show_header=True, header_style="bold")
    table.add_column("Liniensatz")
    table.add_column("Segmente", justify="right")
    for kind, value in counts.items():
        table.add_row(kind, str(value))
    table.add_row("gesamt", str(sum(counts.values())), style="bold")

    logger.console.rule("Zusammenfassung")
    logger.console.print(table)
    logger.console.print(f"Seiten: {page_count}")
    logger.console.print("Ausgaben:")
    for label, path in outputs.items():
        logger.console.print(f"  • {label}: {escape(str(path))}")


def _handle_known_exception(logger: Logger, exc: Exception, *, prefix: str | None = None) -> None:
    message = str(exc) if str(exc) else exc.__class__.__name__
    if prefix:
        message = f"{prefix}: {message}"
    logger.error(message)


app = typer.Typer(help="Liniertes Papier als PDF aus einer YAML-Definition", add_completion=False)


@app.command(no_args_is_help=True)
def main(
    input_yaml: Path = typer.Argument(..., help="Eingabe: Papier- & Liniensatz-Definition (YAML)"),
    output_pdf: Path = typer.Argument(..., help="Ausgabe: PDF-Datei"),
    num_pages: int = typer.Option(1, "--num-pages", "-n", help="Anzahl der Seiten"),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="YAML mit Werkzeug-Einstellungen (render.*, report.*)",
    ),
    report: Optional[Path] = typer.Option(
        None,
        "--report",
        help="Aufgelöste Segmente zusätzlich als CSV schreiben",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Ausführliche Ausgaben"),
    opts: List[str] = typer.Option(
        [],
        "--opts",
        help="Einstellungen überschreiben, z. B. --opts render.max_pages=20000",
        show_default=False,
        metavar="PATH=VALUE",
    ),
) -> None:
    logger = Logger(verbose=verbose)
    _install_bridge(logger, verbose)

    tracker = MetricsTracker()
    try:
        with use_tracker(tracker):
            with Timer("total"):
                logger.step("Einstellungen laden")
                settings = load_settings(config, opts)
                render_opts = render_options(settings)
                validate_page_count(num_pages, render_opts["max_pages"])

                logger.step("Liniendefinition laden")
                geometry = load_geometry_def(input_yaml)

                logger.step("Linien erzeugen")
                lines = generate_lines(geometry)

                outputs: Dict[str, Path] = {}
                with logger.status("PDF schreiben"):
                    outputs["PDF"] = write_document(
                        output_pdf, geometry.paper_size, lines, num_pages, **render_opts
                    )
                if report is not None:
                    with logger.status("CSV-Bericht"):
                        outputs["CSV"] = Path(
                            write_segments_csv(
                                str(report),
                                geometry.paper_size,
                                lines,
                                report_float_digits(settings),
                            )
                        )

            _summarize(logger, tracker, outputs, num_pages)
            if verbose:
                log.debug("timing: %s", tracker.timing_summary())
    except (FileNotFoundError, ValueError, RuntimeError, OSError, yaml.YAMLError) as exc:
        _handle_known_exception(logger, exc, prefix="Fehler")
        raise typer.Exit(code=2) from exc
    except Exception as exc:  # pragma: no cover - fallback path
        _handle_known_exception(logger, exc, prefix="Unerwarteter Fehler")
        if verbose:
            traceback.print_exc()
        raise typer.Exit(code=1) from exc


if __name__ == "__main__":
    app()
