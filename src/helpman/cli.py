"""Main CLI entry point for helpman.

    helpman [OPTION]... EXECUTABLE

Runs EXECUTABLE with its help option, parses the output, merges any
include file and writes the manual page to stdout (or --output).

Flow:
  1. parse arguments and set up the THAC0 output system
  2. resolve settings: CLI flags > .helpman.json > ~/.helpman/config.json
  3. parse include files first, so a bad include fails before running
     anything
  4. capture help, extract, render, write

Exit codes: 0 success, 1 failure, 2 usage error, 130 interrupted.
"""

import argparse
import sys
from pathlib import Path

from helpman._version import BASE_VERSION
from helpman.errors import (
    HelpCaptureError, HelpmanError, HelpParseError, IncludeParseError,
    SourceDateEpochError,
)


# ---------------------------------------------------------------------------
# Verbosity flags (shared THAC0 controls)
# ---------------------------------------------------------------------------
GLOBAL_FLAGS = {
    "--verbose": {"aliases": ["-v"], "action": "count", "default": 0,
                  "help": "Increase verbosity (-v, -vv, -vvv)"},
    "--quiet": {"aliases": ["-Q"], "action": "count", "default": 0,
                "help": "Decrease verbosity (-Q, -QQ, -QQQ, -QQQQ=silent)"},
    "--show": {"nargs": "?", "action": "append", "metavar": "CHANNEL[:LEVEL]",
               "help": "Show output channel (bare --show lists channels)"},
}


def _build_parser():
    """Build the argparse parser."""
    parser = argparse.ArgumentParser(
        prog="helpman",
        usage="%(prog)s [OPTION]... EXECUTABLE",
        description="helpman generates a manual page out of a program's "
                    "-help output.",
        epilog=(
            "Settings not given on the command line are read from\n"
            ".helpman.json (current directory or a parent), then from\n"
            "~/.helpman/config.json.\n"
            "\n"
            "Examples:\n"
            "  helpman ./mytool > mytool.1\n"
            "  helpman --include mytool.h2m -o mytool.1 ./mytool\n"
            "  helpman --help-option=--help --section 8 /usr/sbin/mydaemon"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "executable", nargs="?", metavar="EXECUTABLE",
        help="Program to document",
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"helpman {BASE_VERSION}",
    )
    parser.add_argument("--include", metavar="FILE",
                        help="Include material from FILE")
    parser.add_argument("--opt-include", metavar="FILE",
                        help="Include material from FILE if it exists")
    parser.add_argument("--name", metavar="TEXT",
                        help="Description for the NAME paragraph")
    parser.add_argument("--section", "-s", metavar="N", type=int,
                        help="Section number for manual page (1, 6, 8; default 1)")
    parser.add_argument("--output", "-o", metavar="FILE",
                        help="Write the page to FILE instead of stdout")
    parser.add_argument("--help-option", metavar="OPT",
                        help="Option that makes EXECUTABLE print its help "
                             "(default: -help; use --help-option=--help)")
    parser.add_argument("--timeout", metavar="SECONDS", type=float,
                        help="Give up on EXECUTABLE after SECONDS")
    parser.add_argument("--no-fold", action="store_true", default=False,
                        help="Do not fold indented continuation lines into "
                             "flag descriptions")

    for flag, kwargs in GLOBAL_FLAGS.items():
        kw = {k: v for k, v in kwargs.items() if k != "aliases"}
        parser.add_argument(flag, *kwargs.get("aliases", []), **kw)

    return parser


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------
def _read_include(path):
    from helpman.include import split_sections

    with open(path, encoding="utf-8") as f:
        return split_sections(f)


def load_includes(include=None, opt_include=None):
    """Parse --include and --opt-include into one IncludeSet (or None).

    A missing --opt-include file is skipped; a missing --include file is
    an error (OSError propagates).  When both are given, sections from
    --opt-include win.
    """
    from helpman.lib.log_lib import get_output

    out = get_output()
    result = None
    if include:
        result = _read_include(include)
        out.emit(1, "Include file: {path}", channel='include', path=include)
    if opt_include:
        if Path(opt_include).is_file():
            extra = _read_include(opt_include)
            result = extra if result is None else result.merged(extra)
            out.emit(1, "Include file: {path}", channel='include',
                     path=opt_include)
        else:
            out.emit(1, "Optional include {path} not found, skipped",
                     channel='include', path=opt_include)
    return result


def _hint_for(error):
    if isinstance(error, HelpCaptureError):
        return 'exec.help_option'
    if isinstance(error, HelpParseError):
        return 'parse.flag_layout'
    if isinstance(error, IncludeParseError):
        return 'include.name_format'
    if isinstance(error, SourceDateEpochError):
        return 'render.source_date_epoch'
    return None


def run(args):
    """Generate the manual page described by ``args``. Returns exit code."""
    from helpman.config import resolve_config
    from helpman.helptext import extract_help
    from helpman.lib.log_lib import get_output
    from helpman.manpage import render_manpage
    from helpman.output import print_ok
    from helpman.runner import DEFAULT_HELP_OPTION, get_help, program_name

    out = get_output()
    cfg = resolve_config(args)
    section = cfg["section"] if cfg["section"] is not None else 1

    include = load_includes(cfg["include"], cfg["opt_include"])
    text = get_help(args.executable, cfg["help_option"] or DEFAULT_HELP_OPTION,
                    timeout=args.timeout)
    record = extract_help(text, fold_continuations=not args.no_fold)
    if not record.flags:
        out.hint('parse.no_flags', 'verbose')

    page = render_manpage(record, program_name(args.executable),
                          section=section, include=include,
                          description=cfg["name"])

    if cfg["output"]:
        with open(cfg["output"], "w", encoding="utf-8") as f:
            f.write(page)
        print_ok(f"Wrote {cfg['output']}")
    else:
        sys.stdout.write(page)
    return 0


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def main(argv=None):
    """Main entry point for the helpman CLI.

    Args:
        argv: Command-line arguments. None means sys.argv[1:].

    Returns:
        Exit code (0 = success).
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = _build_parser()
    args = parser.parse_args(argv)

    from helpman.channels import configure_channels, format_helpman_channel_list
    from helpman.lib.log_lib import init_output
    from helpman.output import print_error

    # Handle bare --show (list channels and exit)
    if args.show and None in args.show:
        print(format_helpman_channel_list())
        return 0

    configure_channels()
    channels = [s for s in (args.show or []) if s is not None]
    try:
        out = init_output(verbosity=args.verbose - args.quiet, channels=channels)
    except ValueError as e:
        parser.error(str(e))
    import helpman.hints  # noqa: F401

    if not args.executable:
        print_error("missing argument: EXECUTABLE")
        parser.print_usage(sys.stderr)
        return 2

    try:
        return run(args)
    except HelpmanError as e:
        print_error(str(e))
        hint_id = _hint_for(e)
        if hint_id:
            out.hint(hint_id, 'error', prog=args.executable)
        return 1
    except OSError as e:
        where = f"{e.filename}: " if e.filename else ""
        print_error(f"{where}{e.strerror or e}")
        return 1
    except UnicodeDecodeError as e:
        print_error(f"input is not valid UTF-8: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
