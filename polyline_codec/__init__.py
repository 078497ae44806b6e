"""
Encoded Polyline Algorithm Format codec.

Example:
    >>> from polyline_codec import Coordinate, encode_coordinates, decode_coordinates
    >>> path = [Coordinate(latitude=38.5, longitude=-120.2)]
    >>> encode_coordinates(path)
    '_p~iF~ps|U'
    >>> decode_coordinates("_p~iF~ps|U")[0].as_tuple()
    (38.5, -120.2)

    # Encoded string and decoded path in one object
    >>> from polyline_codec import Polyline
    >>> Polyline.from_encoded("_p~iF~ps|U", encoded_levels="B").levels
    [3]
"""

from polyline_codec.core.exceptions import (
    PolylineError,
    InvalidCoordinate,
    InvalidLatitude,
    InvalidLongitude,
    ChunkDecodingError,
    ChunkExtractionError,
    InvalidPrecision,
    InvalidLevel,
    InconsistentPolyline,
)
from polyline_codec.schemas.common import Coordinate, CoordinateResult
from polyline_codec.utils.polyline import (
    DEFAULT_PRECISION,
    encode_five_bit_chunks,
    decode_five_bit_chunks,
    encode_coordinates,
    decode_coordinates,
    encode_levels,
    decode_levels,
    iter_level_chunks,
    decode_level,
)
from polyline_codec.services.polyline import Polyline

__all__ = [
    "PolylineError",
    "InvalidCoordinate",
    "InvalidLatitude",
    "InvalidLongitude",
    "ChunkDecodingError",
    "ChunkExtractionError",
    "InvalidPrecision",
    "InvalidLevel",
    "InconsistentPolyline",
    "Coordinate",
    "CoordinateResult",
    "DEFAULT_PRECISION",
    "encode_five_bit_chunks",
    "decode_five_bit_chunks",
    "encode_coordinates",
    "decode_coordinates",
    "encode_levels",
    "decode_levels",
    "iter_level_chunks",
    "decode_level",
    "Polyline",
]
