#!/usr/bin/env python3
"""
Classify ingredient-label text from the command line and print the scan result as JSON.
Usage: cd backend && python scripts/classify_text.py --file label.txt [--extension ext.json ...]
       echo "Zutaten: Gelatine, Zucker" | python scripts/classify_text.py
"""
import argparse
import json
import logging
import sys
from pathlib import Path

# Ensure backend is on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

logging.basicConfig(level=logging.INFO, stream=sys.stderr)
logger = logging.getLogger(__name__)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Classify OCR label text into a vegan verdict")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--text", help="Label text to classify")
    source.add_argument("--file", type=Path, help="File with label text (default: stdin)")
    parser.add_argument("--lexicon", type=Path, default=None, help="Base lexicon JSON (default: data/lexicon.json)")
    parser.add_argument("--extension", type=Path, action="append", default=[], help="Extension fragment JSON; repeatable")
    parser.add_argument("--include-local-extensions", action="store_true", help="Also merge data/extensions/*.json")
    args = parser.parse_args(argv)

    from veganscan.lexicon.lexicon_loader import load_lexicon, load_local_fragments
    from veganscan.lexicon.lexicon_schema import LexiconValidationError
    from veganscan.lexicon.merger import merge_lexicons
    from veganscan.scanner import classify

    try:
        lexicon = load_lexicon(args.lexicon)
    except LexiconValidationError as e:
        logger.error("Invalid lexicon: %s", e)
        return 2

    fragments = []
    if args.include_local_extensions:
        fragments.extend(load_local_fragments())
    for path in args.extension:
        try:
            fragments.append(json.loads(path.read_text(encoding="utf-8")))
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Skipping extension %s: %s", path, e)
    if fragments and lexicon is not None:
        lexicon = merge_lexicons(lexicon, *fragments)

    if args.text is not None:
        text = args.text
    elif args.file is not None:
        text = args.file.read_text(encoding="utf-8", errors="replace")
    else:
        text = sys.stdin.read()

    result = classify(text, lexicon)
    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
