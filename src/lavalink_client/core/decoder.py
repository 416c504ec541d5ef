"""
Decoding of lavaplayer track blobs.

Nodes identify tracks by an opaque base64 string. It wraps a binary
message written by lavaplayer's ``DataOutput``:

    int32   header      top two bits are flags, the rest is the size
    byte    version     only present when the "versioned" flag is set
    utf     title
    utf     author
    int64   length      milliseconds
    utf     identifier
    bool    is_stream
    utf?    uri         version >= 2, nullable
    utf?    artwork_url version >= 3, nullable
    utf?    isrc        version >= 3, nullable
    utf     source
    ...     source specific fields
    int64   position

``utf`` is a big-endian u16 length followed by (modified) UTF-8 bytes and
``utf?`` is a bool byte that says whether a ``utf`` follows.
"""

import base64
import binascii
import struct
from dataclasses import dataclass
from typing import Optional, Union

from lavalink_client.infrastructure.exceptions import TrackDecodeError

TRACK_INFO_VERSIONED = 1


@dataclass
class DecodedTrack:
    """Track information decoded from a lavaplayer track blob."""

    version: int
    title: str
    author: str
    length: int
    identifier: str
    is_stream: bool
    uri: Optional[str]
    source: str
    position: int = 0
    artwork_url: Optional[str] = None
    isrc: Optional[str] = None


class _Reader:
    """Big-endian cursor over a byte buffer."""

    def __init__(self, data: bytes):
        self.data = data
        self.offset = 0

    def _unpack(self, fmt: str):
        try:
            (value,) = struct.unpack_from(fmt, self.data, self.offset)
        except struct.error as e:
            raise TrackDecodeError(
                f"Track blob truncated at offset {self.offset}"
            ) from e
        self.offset += struct.calcsize(fmt)
        return value

    def read_u8(self) -> int:
        return self._unpack(">B")

    def read_bool(self) -> bool:
        return self.read_u8() != 0

    def read_i32(self) -> int:
        return self._unpack(">i")

    def read_i64(self) -> int:
        return self._unpack(">q")

    def read_utf(self) -> str:
        size = self._unpack(">H")
        end = self.offset + size
        if end > len(self.data):
            raise TrackDecodeError(f"Track blob truncated at offset {self.offset}")
        raw = self.data[self.offset:end]
        self.offset = end
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise TrackDecodeError(f"Invalid UTF-8 string in track blob: {e}") from e

    def read_nullable_utf(self) -> Optional[str]:
        return self.read_utf() if self.read_bool() else None


def decode_track(data: Union[bytes, bytearray]) -> DecodedTrack:
    """
    Decode a binary lavaplayer track blob.

    Raises:
        TrackDecodeError: If the blob is truncated or malformed
    """
    reader = _Reader(bytes(data))

    header = reader.read_i32()
    flags = (header & 0xC0000000) >> 30

    version = reader.read_u8() if flags & TRACK_INFO_VERSIONED else 1

    title = reader.read_utf()
    author = reader.read_utf()
    length = reader.read_i64()
    identifier = reader.read_utf()
    is_stream = reader.read_bool()
    uri = reader.read_nullable_utf() if version >= 2 else None

    artwork_url = None
    isrc = None
    if version >= 3:
        artwork_url = reader.read_nullable_utf()
        isrc = reader.read_nullable_utf()

    source = reader.read_utf()

    # Source specific fields sit between the source name and the position
    position = 0
    if len(reader.data) - reader.offset >= 8:
        (position,) = struct.unpack_from(">q", reader.data, len(reader.data) - 8)

    return DecodedTrack(
        version=version,
        title=title,
        author=author,
        length=length,
        identifier=identifier,
        is_stream=is_stream,
        uri=uri,
        source=source,
        position=position,
        artwork_url=artwork_url,
        isrc=isrc,
    )


def decode_track_base64(track: str) -> DecodedTrack:
    """
    Decode a base64 encoded lavaplayer track blob, as returned by the REST API.

    Raises:
        TrackDecodeError: If the input is not valid base64 or the blob is malformed
    """
    try:
        data = base64.b64decode(track, validate=True)
    except (binascii.Error, ValueError) as e:
        raise TrackDecodeError(f"Track is not valid base64: {e}") from e
    return decode_track(data)
