"""
Error kinds raised by the polyline codec.

PolylineError does not derive from ValueError: pydantic only wraps
ValueError/AssertionError raised inside validators, so the specific kind
raised by Coordinate validation reaches the caller unchanged.
"""


class PolylineError(Exception):
    """Base class for every codec error."""


class InvalidCoordinate(PolylineError):
    """A latitude or longitude is outside its legal range."""


class InvalidLatitude(InvalidCoordinate):
    def __init__(self, latitude: float):
        self.latitude = latitude
        super().__init__(f"Invalid latitude {latitude}: must be within [-90, 90]")


class InvalidLongitude(InvalidCoordinate):
    def __init__(self, longitude: float):
        self.longitude = longitude
        super().__init__(f"Invalid longitude {longitude}: must be within [-180, 180]")


class ChunkDecodingError(PolylineError):
    """An encoded integer is truncated, too long, or holds an invalid character."""


class ChunkExtractionError(PolylineError):
    """Encoded levels end without a terminating chunk."""


class InvalidPrecision(PolylineError):
    def __init__(self, precision: float):
        self.precision = precision
        super().__init__(f"Invalid precision {precision}: must be greater than 0")


class InvalidLevel(PolylineError):
    def __init__(self, level):
        self.level = level
        super().__init__(f"Invalid level {level!r}: must be an integer within [0, 2**30)")


class InconsistentPolyline(PolylineError):
    """A decoded form and an encoded form were both given and do not match."""
