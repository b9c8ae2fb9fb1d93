from fastapi import FastAPI
from mangum import Mangum
from api.jobs_routes import router as jobs_router
from config.settings import settings
from utils.crawl_logging import configure_logging

# Timestamp + file:line in logs
configure_logging(settings.LOG_LEVEL)

app = FastAPI(
    title="Job Listing Crawler API",
    description="Crawls a paginated job search and returns deduplicated job listings",
    version="1.0.0",
)

# Include routers
app.include_router(jobs_router, tags=["Jobs"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    from datetime import datetime, timezone
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    }


# Lambda handler
handler = Mangum(app, lifespan="off")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
