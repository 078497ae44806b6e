from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Tuple
from polyline_codec.core.exceptions import (
    InvalidCoordinate,
    InvalidLatitude,
    InvalidLongitude,
)

class Location(BaseModel):
    lat: float = Field(..., description="Latitude", ge=-90, le=90)
    lng: float = Field(..., description="Longitude", ge=-180, le=180)


class Coordinate(BaseModel):
    """
    A validated geographic coordinate.
    
    Construction is the only validation gate: an out-of-range latitude
    raises InvalidLatitude, an out-of-range longitude raises
    InvalidLongitude. NaN is never in range.
    """
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float

    @field_validator("latitude")
    @classmethod
    def check_latitude(cls, v: float) -> float:
        if not abs(v) <= 90:
            raise InvalidLatitude(v)
        return v

    @field_validator("longitude")
    @classmethod
    def check_longitude(cls, v: float) -> float:
        if not abs(v) <= 180:
            raise InvalidLongitude(v)
        return v

    @classmethod
    def create(cls, latitude: float, longitude: float) -> "CoordinateResult":
        """
        Build a coordinate without raising.
        
        Returns:
            CoordinateResult holding either the coordinate or the error kind
        """
        try:
            return CoordinateResult(coordinate=cls(latitude=latitude, longitude=longitude))
        except InvalidCoordinate as e:
            return CoordinateResult(error=e)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)


class CoordinateResult(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    coordinate: Optional[Coordinate] = None
    error: Optional[InvalidCoordinate] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Coordinate:
        """Return the coordinate or raise the error it was built with."""
        if self.error is not None:
            raise self.error
        return self.coordinate
