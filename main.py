from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from polyline_codec.core.config import settings
from polyline_codec.core.exceptions import PolylineError
from polyline_codec.core.logging_config import logger
from polyline_codec.routers import polyline

app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    redirect_slashes=False  # Disable automatic redirects to prevent POST data loss
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Include routers
app.include_router(polyline.router, prefix="/api/polyline", tags=["Polyline"])


@app.exception_handler(PolylineError)
async def polyline_error_handler(request: Request, exc: PolylineError):
    logger.warning(f"Codec error on {request.url.path}: {type(exc).__name__}: {str(exc)}")
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "error": type(exc).__name__}
    )


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
