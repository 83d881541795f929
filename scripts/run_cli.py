from __future__ import annotations

import sys
from pathlib import Path

import click

project_root = Path(__file__).resolve().parents[1]
src_path = str(project_root / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from lib_failure_signal.cli import main as cli_main  # noqa: E402


@click.command(help="Run the lib_failure_signal CLI from a source checkout (passes additional args)")
@click.argument("args", nargs=-1)
def main(args: tuple[str, ...]) -> None:
    code = cli_main(list(args) if args else ["--help"])
    raise SystemExit(int(code))


if __name__ == "__main__":
    main()
