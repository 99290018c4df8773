"""
Console front end.

Reads command lines from stdin, runs each through a LedgerSession and
prints the output or the error message. Errors never end the loop;
EOF, `quit` or `exit` do.
"""

import argparse
import sys
from typing import Optional, TextIO

from splitledger.activity import configure_logging
from splitledger.commands import USAGE
from splitledger.config import get_settings
from splitledger.models.command import LoadCommand
from splitledger.orchestrator import LedgerSession, create_session


EXIT_WORDS = frozenset({"quit", "exit"})


def run_loop(
    session: LedgerSession,
    stdin: TextIO,
    stdout: TextIO,
    prompt: str = "",
) -> int:
    """Feed lines from stdin into the session until EOF or an exit word."""
    while True:
        if prompt:
            stdout.write(prompt)
            stdout.flush()
        line = stdin.readline()
        if not line:
            break
        stripped = line.strip()
        if not stripped:
            continue
        if stripped in EXIT_WORDS:
            break

        outcome = session.execute(stripped)
        if outcome.text:
            print(outcome.text, file=stdout)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="splitledger",
        description="Interactive ledger for splitting shared expenses.",
    )
    parser.add_argument(
        "--load",
        metavar="PATH",
        help="Snapshot to load before reading commands",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.logging)
    ledger_settings = settings.ledger
    app_settings = settings.app

    session = create_session(ledger_settings)

    initial = args.load or ledger_settings.autoload_path
    if initial:
        outcome = session.execute_command(LoadCommand(path=initial))
        if not outcome.success:
            print(outcome.text, file=sys.stderr)

    interactive = sys.stdin.isatty()
    if interactive:
        print(USAGE)
    return run_loop(
        session,
        sys.stdin,
        sys.stdout,
        prompt=app_settings.prompt if interactive else "",
    )


if __name__ == "__main__":
    sys.exit(main())
