#!/usr/bin/env python3
"""
Print a read-only report for SWF movies: container header, stage size, frame
rate/count and a structural tag scan (root timeline plus DefineSprite
timelines).

Usage:
    python swf_info.py movie.swf [other.swf | some_dir ...] [--trace 15]
        [--json report.json] [--trace-out traces/]

Directories are expanded to the .swf files directly inside them.

Exit codes:
    0 -> every input was parsed and scanned
    1 -> at least one input failed (details on stderr)
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Sequence

from swfinfo import (
    DEFAULT_TRACE_LIMIT,
    SwfError,
    TagTrace,
    open_source,
    read_container_header,
    read_header,
    scan_tags,
)

TYPE_LABELS = {
    "none": "Uncompressed SWF",
    "zlib": "Zlib-compressed SWF",
    "lzma": "LZMA-compressed SWF (not supported)",
}


def iter_swf_files(paths: Iterable[Path]) -> Iterator[Path]:
    for path in paths:
        if path.is_dir():
            found = [p for p in path.iterdir() if p.is_file() and p.suffix.lower() == ".swf"]
            yield from sorted(found, key=lambda p: p.name.casefold())
        else:
            yield path


def _error_text(exc: SwfError) -> str:
    return f"{exc.code}: {exc}"


def inspect(path: Path, *, trace_limit: int = DEFAULT_TRACE_LIMIT, trace_dir: Path | None = None) -> Dict[str, Any]:
    result: Dict[str, Any] = {
        "path": str(path),
        "container": None,
        "type": None,
        "header": None,
        "summary": None,
        "trace": [],
        "errors": [],
    }
    try:
        with open_source(path) as stream:
            container = read_container_header(stream)
    except SwfError as exc:
        result["errors"].append(_error_text(exc))
        return result
    result["container"] = asdict(container)
    result["type"] = TYPE_LABELS[container.compression]

    try:
        header = read_header(path)
    except SwfError as exc:
        result["errors"].append(_error_text(exc))
        return result
    result["header"] = asdict(header)

    destination = trace_dir / f"{path.stem}.trace.txt" if trace_dir is not None else None
    trace = TagTrace(limit=trace_limit, destination=destination)
    try:
        summary = scan_tags(path, trace)
    except SwfError as exc:
        result["errors"].append(_error_text(exc))
        return result
    trace.flush()
    result["summary"] = asdict(summary)
    result["trace"] = trace.lines
    return result


def _yes_no(flag: bool) -> str:
    return "YES" if flag else "NO"


def format_report(result: Dict[str, Any], trace_limit: int = DEFAULT_TRACE_LIMIT) -> List[str]:
    lines = [f"File: {result['path']}", ""]
    container = result["container"]
    if container is None:
        lines.append(f"ERROR: {result['errors'][0]}")
        return lines

    lines.append(f"Signature: {container['signature']}")
    lines.append(f"Version:   {container['version']}")
    lines.append(f"Declared size (decompressed): {container['declared_length']} bytes")
    lines.append("")
    lines.append(f"Type: {result['type']}")

    header = result["header"]
    if header is None:
        lines.append("")
        lines.append(f"ERROR: {result['errors'][0]}")
        lines.append("Tag scan skipped.")
        return lines

    lines.append("")
    lines.append(f"Stage: {header['width_px']} x {header['height_px']} px")
    lines.append(f"FPS:   {header['fps']:.2f}")
    lines.append(f"Frames:{header['frame_count']}")
    lines.append("")
    lines.append(f"--- Tag scan (first {trace_limit}) ---")

    summary = result["summary"]
    if summary is None:
        lines.append(f"Tag scan failed ({result['errors'][0]})")
        return lines

    lines.extend(result["trace"])
    lines.append("")
    lines.append(f"Total tags: {summary['total_tags']}")
    lines.append(f"ShowFrame tags: {summary['frame_marker_tags']}")
    lines.append(f"Sprites: {summary['sprite_count']}")
    lines.append(f"Sprite tags: {summary['sprite_tags']}")
    lines.append(f"Sprite ShowFrame tags: {summary['sprite_frame_marker_tags']}")
    if summary["has_capabilities_tag"]:
        as3 = "YES(AS3/AVM2)" if summary["uses_vm2"] else "NO(AS1/2/AVM1)"
        lines.append(
            f"FileAttributes: useAs3={as3}, "
            f"useNetwork={_yes_no(summary['network_requested'])}, "
            f"hasMetadata={_yes_no(summary['has_metadata'])}"
        )
    else:
        lines.append("FileAttributes: (not found)")
    return lines


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Report header fields and tag structure of SWF files.")
    parser.add_argument("inputs", nargs="+", type=Path, help="SWF files or directories containing them")
    parser.add_argument(
        "--trace",
        type=int,
        default=DEFAULT_TRACE_LIMIT,
        help=f"Number of tag lines to show per file, sprites included (default: {DEFAULT_TRACE_LIMIT})",
    )
    parser.add_argument("--json", type=Path, help="Optional path for a JSON report of every input")
    parser.add_argument(
        "--trace-out",
        type=Path,
        help="Directory that receives one <name>.trace.txt per scanned file",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    results: List[Dict[str, Any]] = []
    files = list(iter_swf_files(args.inputs))
    if not files:
        print("[warn] no .swf files found in the given inputs", file=sys.stderr)
        return 1
    for idx, path in enumerate(files):
        result = inspect(path, trace_limit=args.trace, trace_dir=args.trace_out)
        results.append(result)
        if idx:
            print()
        print("\n".join(format_report(result, args.trace)))
        for error in result["errors"]:
            print(f"[error] {path}: {error}", file=sys.stderr)

    if args.json:
        args.json.parent.mkdir(parents=True, exist_ok=True)
        args.json.write_text(json.dumps(results, indent=2), encoding="utf-8")
        print(f"\n[+] JSON report written to {args.json}")
    return 1 if any(result["errors"] for result in results) else 0


if __name__ == "__main__":
    raise SystemExit(main())
