#!/usr/bin/env python3
"""
Minimal tag dumper for SWF movies.

Every record in the tag stream starts with a little-endian u16:

    bits 15..6  tag code
    bits  5..0  payload length (0x3F -> a u32 length follows)

The movie is inflated first (CWS) so offsets are relative to the canonical
uncompressed buffer, header included. This tool prints one line per record so
we can eyeball the layout of a file, optionally descending into DefineSprite
timelines.
"""

from __future__ import annotations

import argparse
import itertools
import sys
from pathlib import Path
from typing import Iterator, Sequence, Tuple

from swfinfo import (
    TAG_DEFINE_SPRITE,
    SwfError,
    TagRecord,
    iter_tag_records,
    load_canonical,
    tag_stream_offset,
)


def walk_records(buffer: bytes, *, sprites: bool = False) -> Iterator[Tuple[int, TagRecord]]:
    """Yield ``(depth, record)`` pairs; sprite control tags come right after their DefineSprite."""

    for record in iter_tag_records(buffer, tag_stream_offset(buffer)):
        yield 0, record
        if sprites and record.code == TAG_DEFINE_SPRITE and record.length >= 4:
            for inner in iter_tag_records(buffer, record.offset + 4, record.end):
                yield 1, inner


def describe_record(record: TagRecord, buffer: bytes, *, show_bytes: bool = False) -> str:
    parts = [
        f"off=0x{record.header_offset:06X}",
        f"tag={record.code:<3d}",
        f"name={record.name:<20}",
        f"len={record.length}",
    ]
    if show_bytes and record.length:
        sample = " ".join(f"{b:02X}" for b in buffer[record.offset : record.offset + min(16, record.length)])
        if record.length > 16:
            sample += " …"
        parts.append(f"bytes={sample}")
    return " | ".join(parts)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Dump tag records from an SWF movie.")
    parser.add_argument("input", type=Path, help="Path to the .swf file (FWS or CWS)")
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of records to print (default: no limit)",
    )
    parser.add_argument(
        "--bytes",
        action="store_true",
        help="Include a short hex dump of each payload",
    )
    parser.add_argument(
        "--sprites",
        action="store_true",
        help="Also list the control tags inside DefineSprite records",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        _, buffer = load_canonical(args.input)
        records = walk_records(buffer, sprites=args.sprites)
        if args.limit is not None:
            records = itertools.islice(records, args.limit)
        count = 0
        for depth, record in records:
            print("    " * depth + describe_record(record, buffer, show_bytes=args.bytes))
            count += 1
    except SwfError as exc:
        print(f"[error] {args.input}: {exc.code}: {exc}", file=sys.stderr)
        return 1
    if count == 0:
        print("No tag records discovered in the movie.", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
