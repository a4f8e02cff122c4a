from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Iterator, Tuple

from .bits import rect_byte_length
from .errors import ERR_TOO_SHORT, SwfError
from .inflate_io import HEADER_SIZE, Source, load_canonical
from .logging import TagTrace

TAG_END = 0
TAG_SHOW_FRAME = 1
TAG_DEFINE_SPRITE = 39
TAG_FILE_ATTRIBUTES = 69

LONG_LENGTH_SENTINEL = 0x3F
FRAME_FIELDS_SIZE = 4  # frame rate (u16) + frame count (u16)

# FileAttributes flag bits (low byte of the u32 flag word).
ATTR_USE_NETWORK = 1 << 0
ATTR_ACTIONSCRIPT3 = 1 << 3
ATTR_HAS_METADATA = 1 << 4

TAG_NAMES = {
    0: "End",
    1: "ShowFrame",
    2: "DefineShape",
    4: "PlaceObject",
    5: "RemoveObject",
    9: "SetBackgroundColor",
    12: "DoAction",
    26: "PlaceObject2",
    28: "RemoveObject2",
    39: "DefineSprite",
    43: "FrameLabel",
    45: "SoundStreamHead2",
    69: "FileAttributes",
    70: "PlaceObject3",
    73: "DefineFontAlignZones",
    74: "CSMTextSettings",
    75: "DefineFont3",
    76: "SymbolClass",
    82: "DoABC",
    83: "DefineShape4",
}


def tag_name(code: int) -> str:
    return TAG_NAMES.get(code, "?")


@dataclass(frozen=True)
class TagRecord:
    code: int
    length: int
    offset: int
    header_offset: int

    @property
    def name(self) -> str:
        return tag_name(self.code)

    @property
    def end(self) -> int:
        return self.offset + self.length


@dataclass
class TagSummary:
    total_tags: int = 0
    frame_marker_tags: int = 0
    sprite_count: int = 0
    sprite_tags: int = 0
    sprite_frame_marker_tags: int = 0
    has_capabilities_tag: bool = False
    network_requested: bool = False
    uses_vm2: bool = False
    has_metadata: bool = False


def tag_stream_offset(buffer: bytes) -> int:
    """Offset of the first tag record in a canonical (header-included) buffer."""

    if len(buffer) < HEADER_SIZE + 1:
        raise SwfError(ERR_TOO_SHORT, f"buffer of {len(buffer)} bytes has no stage RECT")
    offset = HEADER_SIZE + rect_byte_length(buffer, HEADER_SIZE) + FRAME_FIELDS_SIZE
    if offset > len(buffer):
        raise SwfError(
            ERR_TOO_SHORT,
            f"tag stream would start at {offset}, past the {len(buffer)}-byte buffer",
        )
    return offset


def iter_tag_records(data: bytes, start: int = 0, stop: int | None = None) -> Iterator[TagRecord]:
    """
    Yield tag records between ``start`` and ``stop``.

    A record whose header or payload would run past ``stop`` ends the walk
    quietly, so truncated files still report everything before the damage.
    An End record is yielded and then closes the stream.
    """

    limit = len(data) if stop is None else min(stop, len(data))
    pos = max(0, start)
    while pos + 2 <= limit:
        header_offset = pos
        (code_and_length,) = struct.unpack_from("<H", data, pos)
        pos += 2
        code = code_and_length >> 6
        length = code_and_length & LONG_LENGTH_SENTINEL
        if length == LONG_LENGTH_SENTINEL:
            if pos + 4 > limit:
                return
            (length,) = struct.unpack_from("<I", data, pos)
            pos += 4
        if pos + length > limit:
            return
        yield TagRecord(code=code, length=length, offset=pos, header_offset=header_offset)
        pos += length
        if code == TAG_END:
            return


def _apply_file_attributes(summary: TagSummary, data: bytes, offset: int) -> None:
    (flags,) = struct.unpack_from("<I", data, offset)
    summary.has_capabilities_tag = True
    summary.network_requested = bool(flags & ATTR_USE_NETWORK)
    summary.uses_vm2 = bool(flags & ATTR_ACTIONSCRIPT3)
    summary.has_metadata = bool(flags & ATTR_HAS_METADATA)


def scan_stream(
    data: bytes,
    summary: TagSummary,
    trace: TagTrace,
    *,
    start: int = 0,
    stop: int | None = None,
    in_sprite: bool = False,
    indent: int = 0,
) -> Tuple[TagSummary, TagTrace]:
    """
    Walk one tag stream (the root timeline, or a sprite's control tags) and
    fold its counts into ``summary``. Sprites are only entered from the root;
    everything under a sprite lands in the shared sprite buckets.
    """

    local_idx = 0
    for record in iter_tag_records(data, start, stop):
        local_idx += 1
        is_frame = record.code == TAG_SHOW_FRAME
        if in_sprite:
            summary.sprite_tags += 1
            if is_frame:
                summary.sprite_frame_marker_tags += 1
            trace.record(
                f"  s{local_idx:3d}: tag={record.code} ({record.name}), len={record.length}",
                indent=indent,
            )
            continue

        summary.total_tags += 1
        if is_frame:
            summary.frame_marker_tags += 1
        if record.code == TAG_FILE_ATTRIBUTES and record.length >= 4:
            _apply_file_attributes(summary, data, record.offset)
        trace.record(
            f"{summary.total_tags:4d}: tag={record.code} ({record.name}), len={record.length}",
            indent=indent,
        )

        if record.code == TAG_DEFINE_SPRITE and record.length >= 4:
            sprite_id, frames = struct.unpack_from("<HH", data, record.offset)
            summary.sprite_count += 1
            trace.note(f"DefineSprite details: id={sprite_id}, frames={frames}", indent=indent + 2)
            scan_stream(
                data,
                summary,
                trace,
                start=record.offset + 4,
                stop=record.end,
                in_sprite=True,
                indent=indent + 2,
            )
    return summary, trace


def scan_buffer(buffer: bytes, trace: TagTrace | None = None) -> TagSummary:
    """Scan a canonical buffer (8-byte header included) from its first tag."""

    if trace is None:
        trace = TagTrace(limit=0)
    start = tag_stream_offset(buffer)
    summary, _ = scan_stream(buffer, TagSummary(), trace, start=start)
    return summary


def scan_tags(source: Source, trace: TagTrace | None = None) -> TagSummary:
    _, buffer = load_canonical(source)
    return scan_buffer(buffer, trace)
