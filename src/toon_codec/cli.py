"""Command line front end: ``toon-codec encode|decode|stats|export``."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from . import __version__
from .constants import DEFAULT_INDENT
from .decoder import ToonDecodeError, decode
from .encoder import encode
from .export import EXPORT_FORMATS, render_export, write_export
from .stats import compare

logger = logging.getLogger("toon_codec")


def _read(path: str | None) -> str:
    if path is None or path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as fh:
        return fh.read()


def _load_json(path: str | None) -> Any:
    return json.loads(_read(path))


def cmd_encode(args: argparse.Namespace) -> int:
    print(encode(_load_json(args.file), {"indent": args.indent}))
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    value = decode(_read(args.file), {"strict": args.strict})
    print(json.dumps(value, indent=2, ensure_ascii=False))
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    result = compare(_load_json(args.file), {"indent": args.indent})
    stats = result.stats
    print(f"json_chars: {stats.json_chars}")
    print(f"toon_chars: {stats.toon_chars}")
    print(f"savings_percent: {stats.savings_percent}")
    print(f"est_tokens_json: {stats.est_tokens_json}")
    print(f"est_tokens_toon: {stats.est_tokens_toon}")
    print(f"verified: {'true' if result.verified else 'false'}")
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    result = compare(_load_json(args.file), {"indent": args.indent})
    artifact = render_export(args.format, result.toon_text, result.json_text)
    print(write_export(artifact, args.output_dir))
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="toon-codec", description="Convert between JSON and TOON.")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument("--verbose", "-v", action="store_true", help="enable debug logging")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("encode", help="encode a JSON document as TOON")
    p.add_argument("file", nargs="?", help="JSON file (default: stdin)")
    p.add_argument("--indent", type=int, default=DEFAULT_INDENT, help="spaces per level")
    p.set_defaults(func=cmd_encode)

    p = sub.add_parser("decode", help="decode a TOON document to JSON")
    p.add_argument("file", nargs="?", help="TOON file (default: stdin)")
    p.add_argument("--strict", action="store_true", help="fail on lines that cannot be decoded")
    p.set_defaults(func=cmd_decode)

    p = sub.add_parser("stats", help="compare JSON and TOON sizes and verify the round trip")
    p.add_argument("file", nargs="?", help="JSON file (default: stdin)")
    p.add_argument("--indent", type=int, default=DEFAULT_INDENT, help="spaces per level")
    p.set_defaults(func=cmd_stats)

    p = sub.add_parser("export", help="write the TOON encoding of a JSON document to a file")
    p.add_argument("file", nargs="?", help="JSON file (default: stdin)")
    p.add_argument("--format", choices=EXPORT_FORMATS, default="toon")
    p.add_argument("--output-dir", default=".", help="directory to write into")
    p.add_argument("--indent", type=int, default=DEFAULT_INDENT, help="spaces per level")
    p.set_defaults(func=cmd_export)

    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        return args.func(args)
    except ToonDecodeError as exc:
        logger.error("Could not decode TOON input: %s", exc)
    except json.JSONDecodeError as exc:
        logger.error("Could not parse JSON input: %s", exc)
    except OSError as exc:
        logger.error("%s", exc)
    return 1
