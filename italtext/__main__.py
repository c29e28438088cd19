"""Module entrypoint for running italtext as ``python -m italtext``."""

from __future__ import annotations

from italtext.cli import main


if __name__ == "__main__":
    main()
