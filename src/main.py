"""Script de ejecución: `python -m main` con `src/` como directorio actual."""

from __future__ import annotations

import sys

# Los emojis del tour no caben en cp1252 (consolas Windows).
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
