#!/usr/bin/env python3
"""Decode a share link (or its bare payload) and print what it contains."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional
from urllib.parse import parse_qs, urlsplit

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from expense_tracker.aggregator import flatten_expenses, quick_summary
from expense_tracker.config import SHARE_PARAM
from expense_tracker.errors import ShareLinkError
from expense_tracker.share import decode_snapshot


def extract_payload(link_or_payload: str) -> str:
    """Return the ``shared`` parameter of a URL, or the input itself."""
    parts = urlsplit(link_or_payload)
    if parts.query:
        values = parse_qs(parts.query).get(SHARE_PARAM)
        if values:
            return values[0]
    return link_or_payload


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Inspect an expense tracker share link.')
    parser.add_argument('link', help='Full share link or the base64 payload')
    parser.add_argument('--rows', type=int, default=20, help='How many expense rows to print')
    args = parser.parse_args(argv)

    try:
        snapshot = decode_snapshot(extract_payload(args.link))
    except ShareLinkError as exc:
        print(f"Invalid share link: {exc}")
        return 1

    summary = quick_summary(snapshot.folders)
    print(f"Folders: {summary['folder_count']} ({', '.join(summary['folder_names']) or '-'})")
    print(f"Total expenses: {summary['total']:.2f}")
    print(f"Categories used: {summary['category_count']}")

    frame = flatten_expenses(snapshot.folders)
    if frame.empty:
        print("\nNo expenses.")
        return 0
    print("\nExpenses:")
    columns = ['folderName', 'title', 'amount', 'category', 'date']
    print(frame[columns].head(args.rows).to_string(index=False))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
