"""Repository-level driver for the chatlog session wrapper."""

from __future__ import annotations

import sys

from chatlog_cli.app import main as cli_main


def main(argv: list[str]) -> int:
    return cli_main(argv)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
