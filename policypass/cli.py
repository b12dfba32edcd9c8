"""CLI for policypass: generate policy-compliant passwords, save and show settings."""

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .config import config_path, config_to_password_config, load_config, save_config
from .errors import EntropySourceError, InvalidConfiguration
from .generator import DEFAULT_LENGTH, generate_passwords
from .storage import write_passwords

logger = logging.getLogger("policypass")

console = Console()
err_console = Console(stderr=True)

EXIT_OK = 0
EXIT_ENTROPY = 1
EXIT_CONFIG = 2


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer")
    if n <= 0:
        raise argparse.ArgumentTypeError(f"{value!r} must be > 0")
    return n


def _effective_settings(args) -> dict:
    """Settings file values with the command-line flags applied on top."""
    cfg = load_config(args.config)
    if args.length is not None:
        cfg["length"] = args.length
    elif args.min_length is not None or args.max_length is not None:
        # an explicit range on the command line beats a fixed length from the config file
        cfg["length"] = None
    flags = {
        "min_length": args.min_length,
        "max_length": args.max_length,
        "groups": args.groups,
        "first_char_group": args.first_char,
        "count": args.count,
    }
    cfg.update({k: v for k, v in flags.items() if v is not None})
    return cfg


def cmd_generate(args) -> int:
    try:
        pw_config = config_to_password_config(_effective_settings(args))
    except InvalidConfiguration as e:
        err_console.print(f"[red]Invalid configuration: {escape(str(e))}[/red]")
        return EXIT_CONFIG
    logger.debug("generating %d password(s) with length %s", pw_config.count, pw_config.length)

    try:
        passwords = generate_passwords(pw_config)
    except EntropySourceError as e:
        err_console.print(f"[red]Failed to generate passwords: {escape(str(e))}[/red]")
        return EXIT_ENTROPY

    if args.output:
        n = write_passwords(args.output, passwords)
        err_console.print(f"[green]Wrote {n} password(s) to:[/green] {escape(args.output)}")
        return EXIT_OK

    for pw in passwords:
        # raw output: passwords may contain rich markup characters such as '['
        console.out(pw, highlight=False)
    return EXIT_OK


def cmd_save_config(args) -> int:
    cfg = _effective_settings(args)
    try:
        config_to_password_config(cfg)
    except InvalidConfiguration as e:
        err_console.print(f"[red]Invalid configuration, nothing saved: {escape(str(e))}[/red]")
        return EXIT_CONFIG
    path = save_config(cfg, args.config)
    err_console.print(f"[green]Saved settings to:[/green] {escape(path)}")
    return EXIT_OK


def cmd_show_config(args) -> int:
    path = args.config or config_path()
    cfg = load_config(args.config)
    table = Table(title=f"Settings ({escape(path)})", show_header=True, header_style="bold cyan")
    table.add_column("Key")
    table.add_column("Value")
    for key, value in cfg.items():
        if key == "groups":
            value = "\n".join(value) if isinstance(value, list) else value
        table.add_row(key, Text("-" if value is None else str(value)))
    console.print(table)
    return EXIT_OK


def _add_settings_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--length", "-l", type=_positive_int, nargs="?", const=DEFAULT_LENGTH,
        help=f"Fixed password length ({DEFAULT_LENGTH} when given without a value)",
    )
    p.add_argument("--min-length", type=_positive_int, help="Minimum length (random length mode)")
    p.add_argument("--max-length", type=_positive_int, help="Maximum length (random length mode)")
    p.add_argument(
        "--group", "-g", dest="groups", action="append", metavar="CHARS",
        help="Character group that must appear at least once (repeatable, replaces the defaults)",
    )
    p.add_argument("--first-char", type=str, metavar="CHARS", help="Characters allowed in the first position")
    p.add_argument("--count", "-n", type=_positive_int, help="How many passwords to generate")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="policypass")
    parser.add_argument("--config", "-c", type=str, help="Path to settings file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging on stderr")
    sub = parser.add_subparsers(dest="cmd", required=True)

    gen = sub.add_parser("generate", help="Generate one or more passwords")
    _add_settings_args(gen)
    gen.add_argument("--output", "-o", type=str, help="Write passwords to this file instead of stdout")
    gen.set_defaults(func=cmd_generate)

    sv = sub.add_parser("save-config", help="Store the given options as the new default settings")
    _add_settings_args(sv)
    sv.set_defaults(func=cmd_save_config)

    sc = sub.add_parser("show-config", help="Show the effective settings")
    sc.set_defaults(func=cmd_show_config)
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "length", None) is not None and (
        args.min_length is not None or args.max_length is not None
    ):
        parser.error("--length cannot be combined with --min-length/--max-length")
    _setup_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
