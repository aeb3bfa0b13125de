from fastapi import FastAPI
from trialsink.core.config import settings
from trialsink.core.logging_config import setup_logger
from trialsink.api import collector

setup_logger("trialsink")

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
)

# Include routers
app.include_router(collector.router, prefix=settings.API_PREFIX, tags=["collector"])


@app.get("/")
async def root():
    return {
        "name": settings.PROJECT_NAME,
        "version": settings.VERSION,
    }
