"""
Run the FastAPI application with uvicorn.
"""
import uvicorn
import os

from movie_recommender.config import settings

if __name__ == "__main__":
    # Only reload in development
    is_development = os.getenv("ENVIRONMENT", "development").lower() == "development"

    print("\n" + "=" * 60)
    if is_development:
        print("🚀 Starting Movie Recommendation API (Development)...")
    else:
        print("🚀 Starting Movie Recommendation API (Production)...")
    print("=" * 60 + "\n")

    uvicorn.run(
        "movie_recommender.main:app",
        host=settings.host,
        port=settings.port,
        reload=is_development,
        log_level=settings.log_level.lower()
    )
