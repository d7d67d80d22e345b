#!/usr/bin/env python3
"""
amicat - Amiga catalog inspector

Reads IFF CTLG (.catalog) files and reports their contents as JSON.

Commands:
    info     - Show signature, language, fingerprint and entry count
    get      - Look up one string by id
    dump     - Export all strings as JSON or YAML
    formats  - List export formats

Example:
    amicat info --input Catalogs/deutsch/MyApp.catalog
    amicat get --input Catalogs/deutsch/MyApp.catalog --id 12
    amicat dump --input Catalogs/deutsch/MyApp.catalog --format yaml -o strings.yaml
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .catalog import AmigaCatalog
from .errors import CatalogError
from .export_handlers import get_handler, handler_for_path, list_formats


def cmd_info(args) -> dict:
    """Describe a catalog."""
    catalog = AmigaCatalog.load(args.input)
    return {
        "status": "ok",
        "catalog": catalog.to_dict(),
    }


def cmd_get(args) -> dict:
    """Look up a single string."""
    catalog = AmigaCatalog.load(args.input)
    text = catalog.get_string(args.id)
    if text is None:
        return {
            "status": "error",
            "error": "missing_id",
            "message": f"String id {args.id} is not in {args.input}",
            "suggestion": f"Run: amicat dump --input {args.input} to list all ids",
        }
    return {
        "status": "ok",
        "id": args.id,
        "text": text,
    }


def cmd_dump(args) -> dict:
    """Export all strings."""
    catalog = AmigaCatalog.load(args.input)

    if args.format == "auto":
        if not args.output:
            handler = get_handler("json")
        else:
            handler = handler_for_path(args.output)
    else:
        handler = get_handler(args.format)

    content = handler.export(catalog)
    if not args.output:
        return {"status": "ok", "format": handler.name, "content": content}

    output = Path(args.output)
    output.write_text(content, encoding="utf-8")
    return {
        "status": "ok",
        "format": handler.name,
        "output_file": str(output),
        "entries": len(catalog),
        "summary": f"Wrote {len(catalog)} strings from {args.input} to {output}",
    }


def cmd_formats(args) -> dict:
    """List export formats."""
    formats = list_formats()
    return {
        "status": "ok",
        "formats": formats,
        "summary": f"{len(formats)} formats supported: {', '.join(f['name'] for f in formats)}",
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="amicat",
        description="amicat - Amiga catalog inspector",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show catalog metadata
  amicat info --input MyApp.catalog

  # Print one string
  amicat get --input MyApp.catalog --id 12

  # Export to YAML (format picked from the extension)
  amicat dump --input MyApp.catalog --output strings.yaml

  # Export to stdout as JSON
  amicat dump --input MyApp.catalog --format json
        """,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log decoding details to stderr")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    info_parser = subparsers.add_parser("info", help="Show catalog metadata")
    info_parser.add_argument("--input", "-i", required=True, help="Catalog file")

    get_parser = subparsers.add_parser("get", help="Look up one string")
    get_parser.add_argument("--input", "-i", required=True, help="Catalog file")
    get_parser.add_argument("--id", type=int, required=True, help="String id")

    dump_parser = subparsers.add_parser("dump", help="Export all strings")
    dump_parser.add_argument("--input", "-i", required=True, help="Catalog file")
    dump_parser.add_argument("--output", "-o", help="Output file (default: print in the JSON result)")
    dump_parser.add_argument("--format", "-f", default="auto",
                             choices=["auto", "json", "yaml"],
                             help="Export format (default: from output extension, else json)")

    subparsers.add_parser("formats", help="List export formats")

    return parser


COMMANDS = {
    "info": cmd_info,
    "get": cmd_get,
    "dump": cmd_dump,
    "formats": cmd_formats,
}


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        result = COMMANDS[args.command](args)
    except CatalogError as e:
        print(json.dumps({
            "status": "error",
            "error": e.message,
            "error_type": type(e).__name__,
            "details": e.to_dict(),
        }), file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(json.dumps({
            "status": "error",
            "error": str(e),
            "error_type": type(e).__name__,
        }), file=sys.stderr)
        sys.exit(1)

    print(json.dumps(result, indent=2, ensure_ascii=False))
    if result.get("status") != "ok":
        sys.exit(1)


if __name__ == "__main__":
    main()
