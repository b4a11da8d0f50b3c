"""CLI for ArchPass: generate, score, presets, serve."""

import argparse
import logging
import sys

from rich import print
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from . import GENERATOR_NAME, __version__
from .config import load_config
from .errors import PasswordGenerationError
from .generator import generate_batch
from .presets import DEFAULT_PRESET, PRESETS
from .score import score_password

logger = logging.getLogger("archpass")

LEVEL_COLOURS = {
    "very_weak": "red",
    "weak": "red",
    "moderate": "yellow",
    "strong": "green",
    "very_strong": "bold green",
}


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


def _level(level: str) -> str:
    colour = LEVEL_COLOURS.get(level, "white")
    return f"[{colour}]{level}[/{colour}]"


def cmd_generate(args):
    results = generate_batch(
        count=args.copies,
        length=args.length,
        preset_name=args.type,
        exclude_ambiguous=args.exclude_ambiguous,
    )
    for i, r in enumerate(results):
        print(f"[bold green]Password #{i+1}:[/bold green] {r.value}  "
              f"({r.strength.score}/100, {_level(r.strength.level)})")


def cmd_score(args):
    result = score_password(args.password)
    header = f"Score: {result.score} / 100 — {result.level}"
    body = "\n".join(f" • {f}" for f in result.feedback) or "No suggestions."
    print(Panel(body, title=header, border_style=LEVEL_COLOURS.get(result.level, "white")))


def cmd_presets(args):
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Type")
    table.add_column("Characters")
    table.add_column("Default", justify="right")
    table.add_column("Max", justify="right")
    for p in PRESETS.values():
        table.add_row(p.name, p.alphabet, str(p.default_length), str(p.max_length))
    print(table)


def cmd_serve(args):
    from archweb.api import create_app

    cfg = load_config()
    if args.host:
        cfg["host"] = args.host
    if args.port:
        cfg["port"] = args.port
    app = create_app(cfg)
    logger.info("%s is running on port %s", GENERATOR_NAME, cfg["port"])
    logger.info("Local: http://localhost:%s", cfg["port"])
    logger.info("Environment: %s", cfg["environment"])
    app.run(host=cfg["host"], port=cfg["port"], debug=cfg["environment"] == "development")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="archpass", description=GENERATOR_NAME)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (default from config)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    gen = sub.add_parser("generate", help="Generate one or more passwords")
    gen.add_argument("--length", type=int, default=12, help="Password length")
    gen.add_argument("--type", type=str, default=DEFAULT_PRESET, choices=sorted(PRESETS), help="Preset")
    gen.add_argument("--exclude-ambiguous", action="store_true", help="Leave out 0, O, 1, I and l")
    gen.add_argument("--copies", type=int, default=1, help="How many passwords to generate")
    gen.set_defaults(func=cmd_generate)

    sc = sub.add_parser("score", help="Score a password and show feedback")
    sc.add_argument("password", type=str, help="Password to evaluate (wrap in quotes)")
    sc.set_defaults(func=cmd_score)

    pr = sub.add_parser("presets", help="List the available presets")
    pr.set_defaults(func=cmd_presets)

    srv = sub.add_parser("serve", help="Run the HTTP API")
    srv.add_argument("--host", type=str, help="Bind address")
    srv.add_argument("--port", type=int, help="Port")
    srv.set_defaults(func=cmd_serve)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level or load_config()["log_level"])
    try:
        args.func(args)
    except PasswordGenerationError as e:
        print(f"[red]{e}[/red]")
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
