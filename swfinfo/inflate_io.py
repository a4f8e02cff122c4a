from __future__ import annotations

import io
import struct
import zlib
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator, Tuple, Union

from .errors import (
    ERR_BAD_SIGNATURE,
    ERR_DECOMPRESS,
    ERR_IO,
    ERR_SIZE_OUT_OF_BOUNDS,
    ERR_TOO_SHORT,
    ERR_UNSUPPORTED_COMPRESSION,
    SwfError,
)

Source = Union[str, Path, bytes, bytearray, memoryview]

HEADER_SIZE = 8
MIN_DECLARED_LENGTH = HEADER_SIZE
MAX_DECLARED_LENGTH = 12 * 1024 * 1024
PREFIX_LIMIT = 256
INFLATE_CHUNK = 2048

SIG_UNCOMPRESSED = "FWS"
SIG_ZLIB = "CWS"
SIG_LZMA = "ZWS"
CANONICAL_SIGNATURE = SIG_UNCOMPRESSED

COMPRESSION_BY_SIGNATURE = {
    SIG_UNCOMPRESSED: "none",
    SIG_ZLIB: "zlib",
    SIG_LZMA: "lzma",
}


@dataclass(frozen=True)
class ContainerHeader:
    signature: str
    version: int
    declared_length: int

    @property
    def compression(self) -> str:
        return COMPRESSION_BY_SIGNATURE[self.signature]

    @property
    def supported(self) -> bool:
        return self.signature != SIG_LZMA


@contextmanager
def open_source(source: Source) -> Iterator[BinaryIO]:
    """
    Yield a binary stream over ``source``. Paths are opened for reading and
    closed again however the caller leaves the block; in-memory buffers are
    wrapped without touching the filesystem.
    """

    if isinstance(source, (bytes, bytearray, memoryview)):
        yield io.BytesIO(bytes(source))
        return
    try:
        handle = open(source, "rb")
    except OSError as exc:
        raise SwfError(ERR_IO, f"cannot open {source}: {exc.strerror or exc}") from exc
    with handle:
        yield handle


def _read(stream: BinaryIO, size: int) -> bytes:
    try:
        return stream.read(size)
    except OSError as exc:
        raise SwfError(ERR_IO, f"read failed: {exc.strerror or exc}") from exc


def parse_container_header(raw: bytes) -> ContainerHeader:
    if len(raw) < HEADER_SIZE:
        raise SwfError(ERR_TOO_SHORT, f"container header needs {HEADER_SIZE} bytes, got {len(raw)}")
    signature = raw[:3].decode("latin-1")
    if signature not in COMPRESSION_BY_SIGNATURE:
        raise SwfError(ERR_BAD_SIGNATURE, f"unrecognized signature {raw[:3]!r}")
    version = raw[3]
    (declared_length,) = struct.unpack_from("<I", raw, 4)
    return ContainerHeader(signature=signature, version=version, declared_length=declared_length)


def read_container_header(stream: BinaryIO) -> ContainerHeader:
    return parse_container_header(_read(stream, HEADER_SIZE))


def validate_declared_length(declared_length: int) -> None:
    if not MIN_DECLARED_LENGTH <= declared_length <= MAX_DECLARED_LENGTH:
        raise SwfError(
            ERR_SIZE_OUT_OF_BOUNDS,
            f"declared length {declared_length} outside "
            f"[{MIN_DECLARED_LENGTH}, {MAX_DECLARED_LENGTH}]",
        )


def _reject_unsupported(header: ContainerHeader) -> None:
    if not header.supported:
        raise SwfError(
            ERR_UNSUPPORTED_COMPRESSION,
            f"{header.signature} (LZMA) containers are not supported",
        )


def read_prefix(stream: BinaryIO, header: ContainerHeader, limit: int = PREFIX_LIMIT) -> bytes:
    """
    Return at most ``limit`` uncompressed body bytes, starting right after the
    8-byte container header. A compressed stream that runs out of input early
    yields whatever it inflated; only corrupt data is an error here.
    """

    _reject_unsupported(header)
    if header.signature == SIG_UNCOMPRESSED:
        prefix = _read(stream, limit)
    else:
        inflater = zlib.decompressobj()
        out = bytearray()
        try:
            while len(out) < limit and not inflater.eof:
                pending = inflater.unconsumed_tail or _read(stream, INFLATE_CHUNK)
                if not pending:
                    break
                out += inflater.decompress(pending, limit - len(out))
        except zlib.error as exc:
            raise SwfError(ERR_DECOMPRESS, f"zlib body is corrupt: {exc}") from exc
        prefix = bytes(out)
    if not prefix:
        raise SwfError(ERR_TOO_SHORT, "no body bytes follow the container header")
    return prefix


def _inflate_body(stream: BinaryIO, capacity: int) -> bytes:
    inflater = zlib.decompressobj()
    out = bytearray()
    try:
        while not inflater.eof:
            pending = inflater.unconsumed_tail or _read(stream, INFLATE_CHUNK)
            if not pending:
                break
            room = capacity - len(out)
            # Ask for one byte even when full so an oversize stream shows itself.
            chunk = inflater.decompress(pending, room or 1)
            if len(chunk) > room:
                raise SwfError(
                    ERR_DECOMPRESS,
                    f"inflated body exceeds the declared {capacity + HEADER_SIZE} bytes",
                )
            out += chunk
    except zlib.error as exc:
        raise SwfError(ERR_DECOMPRESS, f"zlib body is corrupt at output byte {len(out)}: {exc}") from exc
    if not inflater.eof:
        raise SwfError(
            ERR_DECOMPRESS,
            f"zlib body ended after {len(out)} bytes without an end-of-stream marker",
        )
    return bytes(out)


def read_body(stream: BinaryIO, header: ContainerHeader) -> bytes:
    """
    Materialize the whole uncompressed body (everything after the 8-byte
    header). The declared length is checked before it sizes anything.
    """

    validate_declared_length(header.declared_length)
    _reject_unsupported(header)
    capacity = header.declared_length - HEADER_SIZE
    if header.signature == SIG_UNCOMPRESSED:
        return _read(stream, capacity)
    return _inflate_body(stream, capacity)


def canonicalize(header: ContainerHeader, body: bytes) -> bytes:
    """Prefix ``body`` with an uncompressed-style header so offsets are uniform."""

    synthetic = CANONICAL_SIGNATURE.encode("ascii") + struct.pack(
        "<BI", header.version, header.declared_length
    )
    return synthetic + bytes(body)


def load_canonical(source: Source) -> Tuple[ContainerHeader, bytes]:
    with open_source(source) as stream:
        header = read_container_header(stream)
        body = read_body(stream, header)
    return header, canonicalize(header, body)
