"""Command line entry point for building CSS sprites."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from sprite_css.config import load_config
from sprite_css.scheduler import build_sprites


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build CSS sprites from stylesheet directives")
    parser.add_argument("--root-dir", type=Path, help="Directory scanned recursively for stylesheets")
    parser.add_argument(
        "--css-file",
        type=Path,
        action="append",
        dest="css_files",
        help="Stylesheet to process (repeatable)",
    )
    parser.add_argument("--output-dir", type=Path, help="Write outputs here, mirroring the root directory")
    parser.add_argument("--document-root-dir", type=Path, help="Directory that root-relative URLs resolve against")
    parser.add_argument("--config", type=Path, help="Optional JSON config path")
    parser.add_argument("--css-file-suffix", type=str, help="Suffix for rewritten stylesheet names")
    parser.add_argument("--css-file-encoding", type=str, help="Encoding of stylesheets")
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["INFO", "WARNING", "ERROR"],
        help="Minimum level of messages printed",
    )
    parser.add_argument("--message-output", type=Path, help="Write all messages to JSON/CSV")
    parser.add_argument("--png-optimize", action="store_true", default=None, help="Optimize PNG output")
    parser.add_argument(
        "--fail-on-warning",
        action="store_true",
        help="Exit with status 1 if any warning was reported",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        config = load_config(
            args.config,
            {
                "root_dir": args.root_dir,
                "css_files": args.css_files,
                "output_dir": args.output_dir,
                "document_root_dir": args.document_root_dir,
                "css_file_suffix": args.css_file_suffix,
                "css_file_encoding": args.css_file_encoding,
                "log_level": args.log_level,
                "message_output": args.message_output,
                "png_optimize": args.png_optimize,
            },
        )
        result = build_sprites(config)
    except ValueError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    print(f"Sprites built: {len(result['sprites'])}")
    print(f"Stylesheets written: {len(result['stylesheets'])}")
    if result["warnings"]:
        print(f"Warnings: {result['warnings']}")
        if args.fail_on_warning:
            return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
