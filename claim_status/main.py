import logging

from fastapi import FastAPI

from claim_status.config import get_settings
from claim_status.dependencies import lifespan
from claim_status.routers import claims_router

logging.basicConfig(
    level=get_settings().LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(
    title="Claim Status Service",
    version="1.0.0",
    description="Read-only claim lookup with Azure OpenAI note summarization.",
    lifespan=lifespan,
)

# include routers
app.include_router(claims_router.router, prefix="/claims", tags=["claims"])


@app.get("/healthz", tags=["system"])
async def healthz():
    """
    Quick health-check endpoint to confirm the service is running.
    """
    return {"status": "ok", "version": app.version}
