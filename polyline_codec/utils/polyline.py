"""
Polyline encoding utility.
Implements the Encoded Polyline Algorithm Format, including the optional
levels string that accompanies a polyline.
ref: https://developers.google.com/maps/documentation/utilities/polylinealgorithm

Rounding follows Google's iOS SDK (half away from zero) rather than the
online utility.
"""
import math
from typing import Iterable, Iterator, List, Tuple

from polyline_codec.core.exceptions import (
    ChunkDecodingError,
    ChunkExtractionError,
    InvalidLevel,
    InvalidPrecision,
)
from polyline_codec.schemas.common import Coordinate

DEFAULT_PRECISION = 1e5

CHUNK_BITS = 5
CHUNK_MASK = 0x1F
CONTINUATION_BIT = 0x20
CHAR_OFFSET = 63
MAX_CHAR = CHAR_OFFSET + 0x3F
# 6 chunks carry 30 bits
MAX_CHUNKS = 6

# largest level that still fits in MAX_CHUNKS
MAX_LEVEL = 2 ** (CHUNK_BITS * MAX_CHUNKS) - 1


def encode_five_bit_chunks(value: int) -> str:
    """
    Encode a non-negative integer as one or more printable characters.

    Args:
        value: Integer >= 0

    Returns:
        At least one character, low 5-bit group first.
    """
    if value < 0:
        raise ValueError(f"Cannot chunk-encode negative value {value}")

    result = []
    while value >= CONTINUATION_BIT:
        result.append(chr((CONTINUATION_BIT | (value & CHUNK_MASK)) + CHAR_OFFSET))
        value >>= CHUNK_BITS
    result.append(chr(value + CHAR_OFFSET))

    return "".join(result)


def decode_five_bit_chunks(data: bytes, position: int) -> Tuple[int, int]:
    """
    Decode one integer starting at `position`.

    Args:
        data: Encoded bytes
        position: Index of the integer's first chunk

    Returns:
        (value, position just past the integer's last chunk)

    Raises:
        ChunkDecodingError: If the input ends mid-integer, a character is
            outside the encoding's range, or more than 6 chunks are needed
    """
    length = len(data)
    value = 0

    for index in range(MAX_CHUNKS):
        if position >= length:
            raise ChunkDecodingError(f"Unexpected end of input at position {position}")

        char = data[position]
        if not CHAR_OFFSET <= char <= MAX_CHAR:
            raise ChunkDecodingError(f"Invalid character {chr(char)!r} at position {position}")

        chunk = char - CHAR_OFFSET
        value |= (chunk & CHUNK_MASK) << (CHUNK_BITS * index)
        position += 1

        if not chunk & CONTINUATION_BIT:
            return value, position

    raise ChunkDecodingError(f"Value exceeds {MAX_CHUNKS} chunks before position {position}")


def encode_coordinates(coordinates: Iterable[Coordinate], precision: float = DEFAULT_PRECISION) -> str:
    """
    Encode coordinates into a polyline string.

    Args:
        coordinates: Validated coordinates, in path order
        precision: Scale factor applied before rounding (default: 1e5)

    Returns:
        Encoded polyline string ("" for no coordinates).
    """
    check_precision(precision)

    result = []
    prev_lat = 0
    prev_lon = 0

    for coordinate in coordinates:
        lat_int = _round(coordinate.latitude * precision)
        lon_int = _round(coordinate.longitude * precision)

        result.append(_encode_value(lat_int - prev_lat))
        result.append(_encode_value(lon_int - prev_lon))

        prev_lat = lat_int
        prev_lon = lon_int

    return "".join(result)


def decode_coordinates(encoded: str, precision: float = DEFAULT_PRECISION) -> List[Coordinate]:
    """
    Decode a polyline string into coordinates.

    Decoding is all-or-nothing: no prefix of the path is returned when any
    part of the input is malformed.

    Args:
        encoded: Encoded polyline string
        precision: Scale factor used when the polyline was encoded (default: 1e5)

    Returns:
        List of coordinates ([] for an empty string).

    Raises:
        ChunkDecodingError: If the input is truncated or malformed
        InvalidLatitude, InvalidLongitude: If a reconstructed point is out of range
    """
    check_precision(precision)

    data = encoded.encode("utf-8")
    position = 0
    lat = 0
    lon = 0
    coordinates = []

    while position < len(data):
        lat_delta, position = decode_five_bit_chunks(data, position)
        lon_delta, position = decode_five_bit_chunks(data, position)

        lat += _decode_value(lat_delta)
        lon += _decode_value(lon_delta)

        coordinates.append(Coordinate.create(lat / precision, lon / precision).unwrap())

    return coordinates


def encode_levels(levels: Iterable[int]) -> str:
    """Encode unsigned levels, one chunk group per level, no delta step."""
    return "".join(encode_five_bit_chunks(_check_level(level)) for level in levels)


def decode_levels(encoded: str) -> List[int]:
    """
    Decode a levels string.

    Raises:
        ChunkExtractionError: If the last level has no terminating chunk
        ChunkDecodingError: If a level's chunk group is malformed
    """
    return [decode_level(chunk) for chunk in iter_level_chunks(encoded)]


def iter_level_chunks(encoded: str) -> Iterator[str]:
    """
    Lazily split a levels string into one chunk group per level.

    A group ends with (and includes) the first character whose continuation
    bit is unset.

    Raises:
        ChunkExtractionError: If input ends before the current group is terminated
    """
    start = 0
    for index, char in enumerate(encoded):
        if _is_terminator(char):
            yield encoded[start:index + 1]
            start = index + 1

    if start < len(encoded):
        raise ChunkExtractionError(
            f"Unterminated level chunk {encoded[start:]!r} at position {start}"
        )


def decode_level(chunk: str) -> int:
    """
    Rebuild a level from a single chunk group.

    The last character carries the most significant bits.
    """
    if not chunk:
        raise ChunkDecodingError("Empty level chunk")
    if len(chunk) > MAX_CHUNKS:
        raise ChunkDecodingError(f"Level chunk {chunk!r} exceeds {MAX_CHUNKS} chunks")

    values = []
    for char in chunk:
        code = ord(char)
        if not CHAR_OFFSET <= code <= MAX_CHAR:
            raise ChunkDecodingError(f"Invalid character {char!r} in level chunk")
        values.append(code - CHAR_OFFSET)

    *leading, last = values
    if last & CONTINUATION_BIT or not all(v & CONTINUATION_BIT for v in leading):
        raise ChunkDecodingError(f"Misplaced continuation bit in level chunk {chunk!r}")

    level = 0
    for value in reversed([v ^ CONTINUATION_BIT for v in leading] + [last]):
        level = (level << CHUNK_BITS) | value

    return level


def _encode_value(value: int) -> str:
    """Zigzag a signed delta and chunk-encode it."""
    value = value << 1
    if value < 0:
        value = ~value

    return encode_five_bit_chunks(value)


def _decode_value(value: int) -> int:
    if value & 1:
        return ~(value >> 1)
    return value >> 1


def _round(value: float) -> int:
    magnitude = abs(value)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return int(math.copysign(whole, value))


def _is_terminator(char: str) -> bool:
    return (ord(char) - CHAR_OFFSET) & CONTINUATION_BIT != CONTINUATION_BIT


def check_precision(precision: float) -> None:
    """Raise InvalidPrecision unless precision is finite and greater than 0."""
    if not (math.isfinite(precision) and precision > 0):
        raise InvalidPrecision(precision)


def _check_level(level: int) -> int:
    if isinstance(level, bool) or not isinstance(level, int) or not 0 <= level <= MAX_LEVEL:
        raise InvalidLevel(level)
    return level
