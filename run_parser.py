#!/usr/bin/env python3
"""
CLI script to extract microformats2 data from HTML files.

Usage:
    python run_parser.py page.html
    python run_parser.py page.html --base-url https://example.com/blog/
    python run_parser.py *.html -o mf2_output.json
"""

import argparse
import json
import logging
from pathlib import Path

from dotenv import load_dotenv
load_dotenv()

from mf2_parser.main import MicroformatsParser
from mf2_parser.exceptions import MF2ParserError


def main():
    parser = argparse.ArgumentParser(description="Extract microformats2 items and rel links from HTML files")
    parser.add_argument("files", nargs="+", help="HTML files to process")
    parser.add_argument("--base-url", "-b", help="Base URL for resolving relative links")
    parser.add_argument("--output", "-o", help="Output JSON file")
    parser.add_argument("--max-depth", type=int, help="Maximum element nesting depth")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    mf2 = MicroformatsParser(
        max_depth=args.max_depth,
        log_level=logging.DEBUG if args.verbose else logging.WARNING
    )

    results = []

    for filepath in args.files:
        path = Path(filepath)
        print(f"Parsing: {path.name}")

        try:
            document = mf2.parse_file(path, base_url=args.base_url)
            results.append({
                "file": path.name,
                "status": "success",
                "result": document.to_dict()
            })
            print(f"  ✓ {len(document.items)} items, {len(document.rels)} rel tokens")

        except MF2ParserError as e:
            results.append({
                "file": path.name,
                "status": "error",
                **e.to_response()
            })
            print(f"  ✗ {e.message}")

        except OSError as e:
            results.append({
                "file": path.name,
                "status": "error",
                "error": str(e)
            })
            print(f"  ✗ Error: {e}")

    output = json.dumps(results, indent=2, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        print(f"\nSaved to: {args.output}")
    else:
        print("\n" + output)


if __name__ == "__main__":
    main()
