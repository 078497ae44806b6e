from fastapi import APIRouter, HTTPException
from polyline_codec.core.logging_config import logger
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
from polyline_codec.services.polyline import polyline_service

router = APIRouter()


@router.post("/encode", response_model=EncodeResponse)
def encode_polyline(request: EncodeRequest):
    """
    Encode a path into a polyline string.

    Args:
        request: Coordinates in path order, optional levels and precision

    Returns:
        Encoded polyline, encoded levels (when levels were given) and the
        precision that was applied
    """
    try:
        result = polyline_service.encode(request)
        logger.info(f"Polyline encoded successfully: length={len(result.encoded_polyline)}")
        return result
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error encoding polyline: {type(e).__name__}: {str(e)}")
        raise


@router.post("/decode", response_model=DecodeResponse)
def decode_polyline(request: DecodeRequest):
    """
    Decode a polyline string into a path.

    Malformed input is rejected as a whole with 422; a partially decoded
    path is never returned.
    """
    try:
        result = polyline_service.decode(request)
        logger.info(f"Polyline decoded successfully: points={len(result.coordinates)}")
        return result
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error decoding polyline: {type(e).__name__}: {str(e)}")
        raise


@router.post("/levels/encode", response_model=LevelsEncodeResponse)
def encode_levels(request: LevelsEncodeRequest):
    try:
        logger.info(f"Encoding levels: count={len(request.levels)}")
        return polyline_service.encode_levels(request)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error encoding levels: {type(e).__name__}: {str(e)}")
        raise


@router.post("/levels/decode", response_model=LevelsDecodeResponse)
def decode_levels(request: LevelsDecodeRequest):
    try:
        logger.info(f"Decoding levels: {len(request.encoded_levels)} chars")
        return polyline_service.decode_levels(request)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error decoding levels: {type(e).__name__}: {str(e)}")
        raise
