from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import time
import logging

from movie_recommender import __version__
from movie_recommender.config import settings
from movie_recommender.db.init_db import init_db
from movie_recommender.web.routes import diagnostics, recommend
from movie_recommender.web.services.recommendation_service import get_request_log_writer
from movie_recommender.web.utils.database import engine, mask_url

logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

SLOW_REQUEST_SECONDS = 5

app = FastAPI(
    title="Movie Recommendation API",
    description="Movie recommendations from a free-text preference",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def timing_middleware(request: Request, call_next):
    """Log requests slower than SLOW_REQUEST_SECONDS."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time

    if process_time > SLOW_REQUEST_SECONDS:
        logger.warning(
            f"Slow request: {request.method} {request.url.path} "
            f"took {process_time:.2f}s"
        )

    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies get the same 400 as a missing preference."""
    logger.warning(f"Invalid request body: {request.method} {request.url.path} - {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"error": recommend.PREFERENCE_REQUIRED}
    )


# Include routers
app.include_router(recommend.router)
app.include_router(diagnostics.router)


@app.on_event("startup")
async def startup_event():
    """Create the request log table and show where the API is listening."""
    await init_db(engine)

    print("\n" + "=" * 60)
    print("🚀 Movie Recommendation API started!")
    print("=" * 60)
    print(f"\n📍 API URL:      http://{settings.host}:{settings.port}")
    print(f"📚 API Docs:     http://{settings.host}:{settings.port}/docs")
    print(f"\n💾 Database:     {mask_url(str(engine.url))}")
    print(f"🤖 OpenAI key:   {'configured' if settings.openai_api_key else 'missing (fallback only)'}")
    print("\n" + "=" * 60 + "\n")


@app.on_event("shutdown")
async def shutdown_event():
    """Let pending request log writes finish before closing the engine."""
    writer = get_request_log_writer()
    if writer.pending:
        logger.info(f"Waiting for {writer.pending} pending log writes")
    try:
        await writer.drain()
    finally:
        await engine.dispose()


@app.get("/")
async def root():
    """Liveness message."""
    return {"message": "Welcome to the Movie Recommendation API"}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "service": "movie-recommender-api"}
