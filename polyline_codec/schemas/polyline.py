from pydantic import BaseModel, Field
from typing import Optional, List
from polyline_codec.schemas.common import Location

# Polyline Schemas
class EncodeRequest(BaseModel):
    coordinates: List[Location]
    levels: Optional[List[int]] = None
    precision: Optional[float] = Field(None, gt=0, description="Scale factor, defaults to 1e5")

class EncodeResponse(BaseModel):
    encoded_polyline: str
    encoded_levels: Optional[str] = None
    precision: float

class DecodeRequest(BaseModel):
    encoded_polyline: str
    encoded_levels: Optional[str] = None
    precision: Optional[float] = Field(None, gt=0, description="Scale factor, defaults to 1e5")

class DecodeResponse(BaseModel):
    coordinates: List[Location]
    levels: Optional[List[int]] = None
    precision: float

# Levels Schemas
class LevelsEncodeRequest(BaseModel):
    levels: List[int]

class LevelsEncodeResponse(BaseModel):
    encoded_levels: str

class LevelsDecodeRequest(BaseModel):
    encoded_levels: str

class LevelsDecodeResponse(BaseModel):
    levels: List[int]
