#!/usr/bin/env python3
"""
Build a spell-check dictionary asset from a word list or a plain-text corpus.

Every input file is tokenized with the same word pattern the service uses
to check text, words are normalized (lower-cased, trimmed), deduplicated
and sorted, then written as:

    <output-dir>/<lang>/<lang>.dic
    <output-dir>/<lang>/<lang>.aff

Usage:
    python scripts/build_wordlist.py rw corpus.txt
    python scripts/build_wordlist.py rw words.txt more-words.txt --output-dir /app/data/dictionaries
    python scripts/build_wordlist.py en novel.txt --min-count 3

Reload the language afterwards (POST /api/v1/spellcheck/languages/<lang>/reload)
or restart the service to pick up the new asset.
"""

import argparse
import sys
from collections import Counter
from pathlib import Path

# Allow running as a plain script from the repository root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.services.dictionary_loader import DictionaryLoader  # noqa: E402
from app.services.spellcheck import WORD_PATTERN  # noqa: E402
from app.services.spellcheck_base import PersistenceFailure, normalize_word  # noqa: E402
from app.utils.language_validator import validate_language_code  # noqa: E402


def count_words(paths, encoding: str = "utf-8") -> Counter:
    """Count normalized word occurrences across input files."""
    counts: Counter = Counter()
    for path in paths:
        with open(path, "r", encoding=encoding, errors="replace") as f:
            for line in f:
                for match in WORD_PATTERN.finditer(line):
                    word = normalize_word(match.group())
                    # Pure numbers are not dictionary words
                    if word and not word.isdigit():
                        counts[word] += 1
    return counts


def main():
    """Build a dictionary asset from input files."""
    parser = argparse.ArgumentParser(
        description="Build a spell-check dictionary asset from word lists or text"
    )
    parser.add_argument("language", help="Language code (e.g., rw, en)")
    parser.add_argument("inputs", nargs="+", type=Path, help="Word lists or text files")
    parser.add_argument(
        "--output-dir", "-o",
        default="dictionaries",
        help="Dictionary root directory (default: dictionaries)"
    )
    parser.add_argument(
        "--min-count",
        type=int,
        default=1,
        help="Drop words seen fewer than this many times (default: 1)"
    )
    parser.add_argument(
        "--encoding",
        default="utf-8",
        help="Encoding of the input files (default: utf-8)"
    )
    args = parser.parse_args()

    if not validate_language_code(args.language):
        print(f"Error: invalid language code '{args.language}'")
        sys.exit(1)

    missing = [str(p) for p in args.inputs if not p.is_file()]
    if missing:
        print(f"Error: input file(s) not found: {', '.join(missing)}")
        sys.exit(1)

    print(f"Reading {len(args.inputs)} file(s)...")
    counts = count_words(args.inputs, encoding=args.encoding)
    words = sorted(word for word, count in counts.items() if count >= args.min_count)

    print(f"Unique words: {len(counts):,}")
    print(f"Kept (min count {args.min_count}): {len(words):,}")

    loader = DictionaryLoader(args.output_dir)
    try:
        dic_path = loader.write_asset(args.language, words)
    except PersistenceFailure as e:
        print(f"Error: {e}")
        sys.exit(1)

    size_kb = dic_path.stat().st_size / 1024
    print(f"\nDone! Wrote {len(words):,} words to {dic_path} ({size_kb:.1f} KB)")


if __name__ == "__main__":
    main()
