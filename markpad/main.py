from __future__ import annotations
import sys
from markpad.app import run_app


def main() -> int:
    """Module entrypoint for `python -m markpad.main` or the `markpad` script."""
    return run_app(sys.argv)


if __name__ == "__main__":
    raise SystemExit(main())
