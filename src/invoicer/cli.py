from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from importlib.resources import files
from pathlib import Path

import yaml

from invoicer.services.pdf_engine import launch_engine

USAGE = """\
usage: invoicer [FILE]                 open the TUI (optionally with an invoice file)
       invoicer init                   copy example config files
       invoicer render FILE [-o OUT]   export an invoice file to PDF
       invoicer html FILE [-o OUT]     write the invoice HTML without printing it
       invoicer serve                  answer JSON-lines requests on stdin/stdout
"""


def _setup_logging() -> None:
    from invoicer.config import get_log_level

    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_brand():
    from invoicer.config import load_brand
    from invoicer.models.brand import Brand

    return Brand.from_dict(load_brand())


def _read_record(path: Path):
    """Load an invoice file; prints the problem and returns None on failure."""
    from invoicer.config import load_invoice
    from invoicer.models.invoice import InvoiceRecord

    try:
        return InvoiceRecord.from_dict(load_invoice(path))
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: could not read {path}: {e}", file=sys.stderr)
        return None


def _init_config() -> None:
    """Copy bundled example files to the user's config directory."""
    from invoicer.config import get_config_dir

    config_dir = get_config_dir()
    examples = files("invoicer") / "templates" / "examples"
    config_dir.mkdir(parents=True, exist_ok=True)

    copied = 0
    for name in ["brand.yaml.example", "invoice.yaml.example"]:
        dest = config_dir / name
        if dest.exists():
            print(f"  already exists: {dest}")
            continue
        src = examples / name
        with src.open("rb") as f:
            dest.write_bytes(f.read())
        print(f"  created: {dest}")
        copied += 1

    print()
    print(f"Config: {config_dir}")
    print()
    if copied:
        print("Next steps:")
        print(f"  1. cp {config_dir / 'brand.yaml.example'} {config_dir / 'brand.yaml'}")
        print("  2. Edit brand.yaml with your shop's letterhead")
        print(f"  3. Run: invoicer render {config_dir / 'invoice.yaml.example'}")
    else:
        print("No new files created (all already existed).")


def _cmd_render(argv: list[str]) -> int:
    from invoicer.services.destination import FixedDestination, PromptDestination
    from invoicer.services.export import Outcome, export_invoice
    from invoicer.utils.filenames import ensure_pdf_suffix
    from invoicer.utils.validators import check_consistency

    parser = argparse.ArgumentParser(
        prog="invoicer render", description="Render an invoice file to PDF."
    )
    parser.add_argument("file", type=Path, help="invoice .json/.yaml file")
    parser.add_argument("-o", "--output", type=Path, help="where to save the PDF")
    parser.add_argument(
        "-y", "--yes", action="store_true", help="save to the suggested path without asking"
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="refuse to render when totals do not match the size breakdowns",
    )
    args = parser.parse_args(argv)
    _setup_logging()

    record = _read_record(args.file)
    if record is None:
        return 1

    if args.check:
        problems = check_consistency(record)
        if problems:
            print("Inconsistent totals:", file=sys.stderr)
            for p in problems:
                print(f"  - {p}", file=sys.stderr)
            return 1

    if args.output is not None:
        destination = FixedDestination(ensure_pdf_suffix(args.output))
    elif args.yes:
        destination = FixedDestination()
    else:
        destination = PromptDestination()

    result = asyncio.run(
        export_invoice(record, destination, brand=_load_brand(), engine_factory=launch_engine)
    )
    if result.outcome is Outcome.SAVED:
        print(f"PDF saved to: {result.file_path}")
        return 0
    if result.outcome is Outcome.CANCELLED:
        print(result.error)
        return 2
    print(f"Error: {result.error}", file=sys.stderr)
    return 1


def _cmd_html(argv: list[str]) -> int:
    from invoicer.services.composer import compose

    parser = argparse.ArgumentParser(
        prog="invoicer html", description="Write the invoice HTML (no PDF engine needed)."
    )
    parser.add_argument("file", type=Path, help="invoice .json/.yaml file")
    parser.add_argument("-o", "--output", type=Path, help="output .html file (default: stdout)")
    args = parser.parse_args(argv)

    record = _read_record(args.file)
    if record is None:
        return 1

    markup = compose(record, _load_brand())
    if args.output is None:
        sys.stdout.write(markup)
        return 0
    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(markup, encoding="utf-8")
    print(f"HTML saved to: {args.output}")
    return 0


def _cmd_serve(argv: list[str]) -> int:
    from invoicer.services.channel import serve

    parser = argparse.ArgumentParser(
        prog="invoicer serve",
        description="Answer generate-pdf requests, one JSON object per line, on stdin/stdout.",
    )
    parser.parse_args(argv)
    _setup_logging()

    asyncio.run(serve(sys.stdin, sys.stdout, brand=_load_brand(), engine_factory=launch_engine))
    return 0


_COMMANDS = {
    "render": _cmd_render,
    "html": _cmd_html,
    "serve": _cmd_serve,
}


def main() -> None:
    """Entry point for the invoicer CLI/TUI."""
    argv = sys.argv[1:]
    if argv and argv[0] in ("-h", "--help"):
        print(USAGE, end="")
        return
    if argv and argv[0] == "init":
        _init_config()
        return
    if argv and argv[0] in _COMMANDS:
        sys.exit(_COMMANDS[argv[0]](argv[1:]))

    from invoicer.tui.app import InvoicerApp

    invoice_path = Path(argv[0]) if argv else None
    app = InvoicerApp(invoice_path)
    app.run()


if __name__ == "__main__":
    main()
