from typing import Any, Dict, List, Optional, Sequence, Tuple, Union
from fastapi import HTTPException
from pydantic import BaseModel, ConfigDict, model_validator

from polyline_codec.core.config import settings
from polyline_codec.core.exceptions import InconsistentPolyline, PolylineError
from polyline_codec.core.logging_config import logger
from polyline_codec.schemas.common import Coordinate, Location
from polyline_codec.schemas.polyline import (
    DecodeRequest,
    DecodeResponse,
    EncodeRequest,
    EncodeResponse,
    LevelsDecodeRequest,
    LevelsDecodeResponse,
    LevelsEncodeRequest,
    LevelsEncodeResponse,
)
from polyline_codec.utils.polyline import (
    DEFAULT_PRECISION,
    check_precision,
    decode_coordinates,
    decode_levels,
    encode_coordinates,
    encode_levels,
)

CoordinateLike = Union[Coordinate, Tuple[float, float]]


class Polyline(BaseModel):
    """
    An encoded polyline together with its decoded form.

    Build it from coordinates to get the encoded string, or from an encoded
    string to get the coordinates. A string that cannot be decoded leaves
    `coordinates` (or `levels`) as None; it is never partially decoded.
    Given both forms, they must agree or InconsistentPolyline is raised.
    """
    model_config = ConfigDict(frozen=True)

    coordinates: Optional[List[Coordinate]] = None
    encoded_polyline: str
    levels: Optional[List[int]] = None
    encoded_levels: Optional[str] = None
    precision: float = DEFAULT_PRECISION

    @model_validator(mode="before")
    @classmethod
    def derive_missing_form(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        data = dict(data)
        precision = data.setdefault("precision", DEFAULT_PRECISION)
        check_precision(precision)

        coordinates = data.get("coordinates")
        encoded_polyline = data.get("encoded_polyline")
        if coordinates is not None:
            validated = [_to_coordinate(c) for c in coordinates]
            derived = encode_coordinates(validated, precision=precision)
            if encoded_polyline is not None and encoded_polyline != derived:
                raise InconsistentPolyline(
                    f"Coordinates encode to {derived!r}, not {encoded_polyline!r}"
                )
            data["coordinates"] = validated
            data["encoded_polyline"] = derived
        elif encoded_polyline is not None:
            try:
                data["coordinates"] = decode_coordinates(encoded_polyline, precision=precision)
            except PolylineError as e:
                logger.warning(f"Could not decode polyline: {type(e).__name__}: {str(e)}")

        levels = data.get("levels")
        encoded_levels = data.get("encoded_levels")
        if levels is not None:
            levels = list(levels)
            derived = encode_levels(levels)
            if encoded_levels is not None and encoded_levels != derived:
                raise InconsistentPolyline(
                    f"Levels encode to {derived!r}, not {encoded_levels!r}"
                )
            data["levels"] = levels
            data["encoded_levels"] = derived
        elif encoded_levels is not None:
            try:
                data["levels"] = decode_levels(encoded_levels)
            except PolylineError as e:
                logger.warning(f"Could not decode levels: {type(e).__name__}: {str(e)}")

        return data

    @classmethod
    def from_coordinates(
        cls,
        coordinates: Sequence[CoordinateLike],
        levels: Optional[Sequence[int]] = None,
        precision: float = DEFAULT_PRECISION
    ) -> "Polyline":
        """
        Encode coordinates and, optionally, their levels.

        Args:
            coordinates: Coordinates or (lat, lon) pairs
            levels: Optional levels to encode alongside (default: None)
            precision: The precision used for encoding (default: 1e5)

        Raises:
            InvalidLatitude, InvalidLongitude: If a (lat, lon) pair is out of range
            InvalidLevel: If a level does not fit in 6 chunks
            InvalidPrecision: If precision is not finite and positive
        """
        return cls(coordinates=list(coordinates), levels=levels, precision=precision)

    @classmethod
    def from_encoded(
        cls,
        encoded_polyline: str,
        encoded_levels: Optional[str] = None,
        precision: float = DEFAULT_PRECISION
    ) -> "Polyline":
        """
        Decode a polyline string and, optionally, its levels string.

        Args:
            encoded_polyline: The polyline to decode
            encoded_levels: The levels to decode (default: None)
            precision: The precision used for decoding (default: 1e5)

        Raises:
            InvalidPrecision: If precision is not finite and positive
        """
        return cls(encoded_polyline=encoded_polyline, encoded_levels=encoded_levels, precision=precision)

    def as_tuples(self) -> Optional[List[Tuple[float, float]]]:
        if self.coordinates is None:
            return None
        return [c.as_tuple() for c in self.coordinates]

    def as_geojson(self) -> Optional[Dict[str, Any]]:
        """GeoJSON LineString geometry; positions are [lon, lat]."""
        if self.coordinates is None:
            return None
        return {
            "type": "LineString",
            "coordinates": [[c.longitude, c.latitude] for c in self.coordinates],
        }


def _to_coordinate(value: CoordinateLike) -> Coordinate:
    if isinstance(value, Coordinate):
        return value
    if isinstance(value, dict):
        return Coordinate(**value)
    lat, lon = value
    return Coordinate(latitude=lat, longitude=lon)


class PolylineService:
    """
    Service layer for the polyline endpoints.

    Translates request schemas into codec calls and codec errors into
    HTTP errors.
    """

    def __init__(self):
        self.default_precision = settings.DEFAULT_PRECISION
        self.max_coordinates = settings.MAX_COORDINATES

    def encode(self, request: EncodeRequest) -> EncodeResponse:
        """
        Encode a path and its optional levels.

        Raises:
            HTTPException 413: If the path has more points than allowed
            HTTPException 422: If a level is negative or does not fit in 6 chunks
        """
        precision = self._precision(request.precision)

        if len(request.coordinates) > self.max_coordinates:
            raise HTTPException(
                status_code=413,
                detail=f"Too many coordinates: {len(request.coordinates)} > {self.max_coordinates}"
            )

        logger.info(f"Encoding polyline: {len(request.coordinates)} points, precision={precision}")

        try:
            polyline = Polyline.from_coordinates(
                [(loc.lat, loc.lng) for loc in request.coordinates],
                levels=request.levels,
                precision=precision,
            )
        except PolylineError as e:
            raise self._unprocessable(e)

        return EncodeResponse(
            encoded_polyline=polyline.encoded_polyline,
            encoded_levels=polyline.encoded_levels,
            precision=precision,
        )

    def decode(self, request: DecodeRequest) -> DecodeResponse:
        """
        Decode a polyline and its optional levels.

        Raises:
            HTTPException 422: If either string cannot be decoded
        """
        precision = self._precision(request.precision)

        logger.info(f"Decoding polyline: {len(request.encoded_polyline)} chars, precision={precision}")

        try:
            coordinates = decode_coordinates(request.encoded_polyline, precision=precision)
            levels = (
                decode_levels(request.encoded_levels)
                if request.encoded_levels is not None
                else None
            )
        except PolylineError as e:
            logger.warning(f"Rejected polyline: {type(e).__name__}: {str(e)}")
            raise self._unprocessable(e)

        return DecodeResponse(
            coordinates=[Location(lat=c.latitude, lng=c.longitude) for c in coordinates],
            levels=levels,
            precision=precision,
        )

    def encode_levels(self, request: LevelsEncodeRequest) -> LevelsEncodeResponse:
        try:
            return LevelsEncodeResponse(encoded_levels=encode_levels(request.levels))
        except PolylineError as e:
            raise self._unprocessable(e)

    def decode_levels(self, request: LevelsDecodeRequest) -> LevelsDecodeResponse:
        try:
            return LevelsDecodeResponse(levels=decode_levels(request.encoded_levels))
        except PolylineError as e:
            logger.warning(f"Rejected levels: {type(e).__name__}: {str(e)}")
            raise self._unprocessable(e)

    def _precision(self, precision: Optional[float]) -> float:
        return precision if precision is not None else self.default_precision

    @staticmethod
    def _unprocessable(error: PolylineError) -> HTTPException:
        return HTTPException(
            status_code=422,
            detail=f"{type(error).__name__}: {str(error)}"
        )


polyline_service = PolylineService()
