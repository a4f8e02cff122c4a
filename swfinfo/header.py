from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Tuple

from .bits import BitReader, Rect, read_rect
from .errors import ERR_TOO_SHORT, SwfError
from .inflate_io import PREFIX_LIMIT, Source, open_source, read_container_header, read_prefix

FRAME_RATE_SCALE = 256.0


@dataclass(frozen=True)
class SwfHeader:
    signature: str
    version: int
    file_length: int
    width_px: int
    height_px: int
    fps: float
    frame_count: int
    stage: Rect
    frame_rate_raw: int


def decode_stage_fields(prefix: bytes) -> Tuple[Rect, int, int]:
    """
    Decode the stage RECT, the 8.8 frame rate and the frame count from the
    first bytes of an uncompressed body (the bytes right after the container
    header).
    """

    reader = BitReader(prefix)
    stage = read_rect(reader)
    pos = reader.byte_position
    if pos + 4 > len(prefix):
        raise SwfError(
            ERR_TOO_SHORT,
            f"prefix of {len(prefix)} bytes ends inside the frame rate/count fields at {pos}",
        )
    frame_rate_raw, frame_count = struct.unpack_from("<HH", prefix, pos)
    return stage, frame_rate_raw, frame_count


def read_header(source: Source, *, prefix_limit: int = PREFIX_LIMIT) -> SwfHeader:
    """Parse the movie header from a path or an in-memory buffer."""

    with open_source(source) as stream:
        container = read_container_header(stream)
        prefix = read_prefix(stream, container, prefix_limit)
    stage, frame_rate_raw, frame_count = decode_stage_fields(prefix)
    return SwfHeader(
        signature=container.signature,
        version=container.version,
        file_length=container.declared_length,
        width_px=stage.width_px,
        height_px=stage.height_px,
        fps=frame_rate_raw / FRAME_RATE_SCALE,
        frame_count=frame_count,
        stage=stage,
        frame_rate_raw=frame_rate_raw,
    )
