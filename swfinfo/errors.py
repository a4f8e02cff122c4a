"""Error codes and the exception raised by every swfinfo entry point.

Callers discriminate on ``SwfError.code`` rather than on exception types, so
the CLI and any other front end can map a failure to a message or an exit
status without knowing which layer raised it.
"""

from __future__ import annotations

ERR_IO: str = "ERR_IO"                                    # missing/unreadable file
ERR_TOO_SHORT: str = "ERR_TOO_SHORT"                      # header or prefix truncated
ERR_BAD_SIGNATURE: str = "ERR_BAD_SIGNATURE"              # not FWS/CWS/ZWS
ERR_UNSUPPORTED_COMPRESSION: str = "ERR_UNSUPPORTED_COMPRESSION"  # ZWS (LZMA)
ERR_DECOMPRESS: str = "ERR_DECOMPRESS"                    # corrupt or short zlib body
ERR_SIZE_OUT_OF_BOUNDS: str = "ERR_SIZE_OUT_OF_BOUNDS"    # declared length outside window

class SwfError(Exception):
    """Raised when a movie container cannot be read.

    ``code`` is one of the ``ERR_*`` strings above; the message carries the
    detail (offsets, sizes, the offending signature).
    """

    def __init__(self, code: str, msg: str = "") -> None:
        super().__init__(msg or code)
        self.code = code
