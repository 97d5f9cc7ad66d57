# src/qbodata/__main__.py
from __future__ import annotations

from .cli import cli


def main() -> None:
    cli(prog_name="qbodata")


if __name__ == "__main__":
    main()
