"""
Read-only inspection of SWF movie containers: header fields and tag-stream
structure for the uncompressed (FWS) and zlib (CWS) variants.
"""

from .bits import BitReader, Rect, read_rect, rect_byte_length
from .errors import (
    ERR_BAD_SIGNATURE,
    ERR_DECOMPRESS,
    ERR_IO,
    ERR_SIZE_OUT_OF_BOUNDS,
    ERR_TOO_SHORT,
    ERR_UNSUPPORTED_COMPRESSION,
    SwfError,
)
from .header import SwfHeader, decode_stage_fields, read_header
from .inflate_io import (
    HEADER_SIZE,
    MAX_DECLARED_LENGTH,
    MIN_DECLARED_LENGTH,
    PREFIX_LIMIT,
    ContainerHeader,
    canonicalize,
    load_canonical,
    open_source,
    parse_container_header,
    read_body,
    read_container_header,
    read_prefix,
    validate_declared_length,
)
from .logging import DEFAULT_TRACE_LIMIT, TagTrace
from .tags import (
    TAG_DEFINE_SPRITE,
    TAG_END,
    TAG_FILE_ATTRIBUTES,
    TAG_NAMES,
    TAG_SHOW_FRAME,
    TagRecord,
    TagSummary,
    iter_tag_records,
    scan_buffer,
    scan_stream,
    scan_tags,
    tag_name,
    tag_stream_offset,
)

__version__ = "0.1.0"

__all__ = [
    "BitReader",
    "Rect",
    "read_rect",
    "rect_byte_length",
    "SwfError",
    "ERR_IO",
    "ERR_TOO_SHORT",
    "ERR_BAD_SIGNATURE",
    "ERR_UNSUPPORTED_COMPRESSION",
    "ERR_DECOMPRESS",
    "ERR_SIZE_OUT_OF_BOUNDS",
    "SwfHeader",
    "decode_stage_fields",
    "read_header",
    "HEADER_SIZE",
    "MIN_DECLARED_LENGTH",
    "MAX_DECLARED_LENGTH",
    "PREFIX_LIMIT",
    "ContainerHeader",
    "canonicalize",
    "load_canonical",
    "open_source",
    "parse_container_header",
    "read_body",
    "read_container_header",
    "read_prefix",
    "validate_declared_length",
    "DEFAULT_TRACE_LIMIT",
    "TagTrace",
    "TAG_END",
    "TAG_SHOW_FRAME",
    "TAG_DEFINE_SPRITE",
    "TAG_FILE_ATTRIBUTES",
    "TAG_NAMES",
    "TagRecord",
    "TagSummary",
    "iter_tag_records",
    "scan_buffer",
    "scan_stream",
    "scan_tags",
    "tag_name",
    "tag_stream_offset",
]
