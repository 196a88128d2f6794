"""CLI for randpass: generate passwords, show or set persisted defaults."""

import argparse
import dataclasses
import logging

from rich import print
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .config import DEFAULTS, coerce_value, config_path, load_config, options_from_config, save_config
from .errors import PasswordGenerationError
from .generator import PasswordGenerator

logger = logging.getLogger(__name__)

# argparse dest -> GenerationOptions field
_OVERRIDES = {
    "length": "length",
    "lower": "lowercase",
    "upper": "uppercase",
    "numbers": "numbers",
    "symbols": "symbols",
    "exclude": "exclude",
    "exclude_similar": "exclude_similar_characters",
    "strict": "strict",
    "symbols_string": "symbols_string",
}


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def cmd_generate(args) -> int:
    cfg = load_config()
    overrides = {
        field: getattr(args, dest)
        for dest, field in _OVERRIDES.items()
        if getattr(args, dest) is not None
    }
    options = dataclasses.replace(options_from_config(cfg), **overrides)
    copies = args.copies if args.copies is not None else cfg["copies"]
    max_attempts = args.max_attempts if args.max_attempts is not None else cfg["max_attempts"]

    try:
        generator = PasswordGenerator(max_attempts=max_attempts)
        passwords = generator.generate_multiple(copies, options)
    except (PasswordGenerationError, ValueError) as e:
        logger.debug("generation failed", exc_info=True)
        print(f"[red]Failed to generate password: {escape(str(e))}[/red]")
        return 1
    for i, pw in enumerate(passwords):
        print(f"[bold green]Password #{i+1}:[/bold green] {escape(pw)}")
    return 0


def cmd_config_show(args) -> int:
    cfg = load_config()
    table = Table(show_header=True, header_style="bold cyan", title=config_path())
    table.add_column("Setting")
    table.add_column("Value")
    table.add_column("Default")
    for key, default in DEFAULTS.items():
        table.add_row(key, repr(cfg[key]), repr(default))
    print(table)
    return 0


def cmd_config_set(args) -> int:
    try:
        value = coerce_value(args.key, args.value)
    except PasswordGenerationError as e:
        print(f"[red]{escape(str(e))}[/red]")
        return 1
    cfg = load_config()
    cfg[args.key] = value
    save_config(cfg)
    print(f"[green]Saved[/green] {args.key} = {escape(repr(value))}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="randpass")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    gen = sub.add_parser("generate", help="Generate one or more passwords")
    gen.add_argument("--length", "-l", type=int, help="Password length")
    gen.add_argument("--lower", action=argparse.BooleanOptionalAction, help="Include lowercase letters")
    gen.add_argument("--upper", action=argparse.BooleanOptionalAction, help="Include uppercase letters")
    gen.add_argument("--numbers", action=argparse.BooleanOptionalAction, help="Include digits")
    gen.add_argument("--symbols", action=argparse.BooleanOptionalAction, help="Include symbols")
    gen.add_argument("--exclude", type=str, help="Characters to leave out")
    gen.add_argument("--exclude-similar", action=argparse.BooleanOptionalAction,
                     help="Leave out look-alike characters (i l L I | ` o O 0)")
    gen.add_argument("--strict", action=argparse.BooleanOptionalAction,
                     help="Require at least one character from every enabled class")
    gen.add_argument("--symbols-string", type=str, help="Custom symbol set replacing the default")
    gen.add_argument("--copies", "-n", type=int, help="How many passwords to generate")
    gen.add_argument("--max-attempts", type=int, help="Give up strict mode after this many draws")
    gen.set_defaults(func=cmd_generate)

    c = sub.add_parser("config", help="Persisted defaults")
    csub = c.add_subparsers(dest="ccmd", required=True)

    c_show = csub.add_parser("show", help="Show current settings")
    c_show.set_defaults(func=cmd_config_show)

    c_set = csub.add_parser("set", help="Change a setting")
    c_set.add_argument("key", choices=sorted(DEFAULTS), help="Setting name")
    c_set.add_argument("value", type=str, help="New value")
    c_set.set_defaults(func=cmd_config_set)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    _setup_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
