"""
Module entrypoint for `python -m printer_queue`.
Delegates to the CLI main in printer_queue.cli.
"""

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
