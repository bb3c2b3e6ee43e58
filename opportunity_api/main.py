# opportunity_api/main.py
import logging

from fastapi import FastAPI, Request
from starlette.responses import PlainTextResponse

from opportunity_api.core.settings import settings
from opportunity_api.core.logging_config import setup_logging
from opportunity_api.core.db import AsyncSessionLocal, init_db
from opportunity_api.errors import WorkspaceNotFound
from opportunity_api.seed import seed_if_empty
from opportunity_api.api import opportunities

setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
logger = logging.getLogger("opportunity_api")

# -------------------------------------------------------------------
# FastAPI app setup
# -------------------------------------------------------------------
app = FastAPI(title="Opportunity Fields Service", version="0.1")

# -------------------------------------------------------------------
# Log every request
# -------------------------------------------------------------------
@app.middleware("http")
async def log_every_request(request: Request, call_next):
    logger.info("[REQ] %s %s", request.method, request.url.path)
    response = await call_next(request)
    logger.info("[RES] %s for %s", response.status_code, request.url.path)
    return response

# -------------------------------------------------------------------
# Routers
# -------------------------------------------------------------------
app.include_router(opportunities.router)

# -------------------------------------------------------------------
# Health check
# -------------------------------------------------------------------
@app.get("/health", include_in_schema=False)
async def health():
    return PlainTextResponse("ok")

# -------------------------------------------------------------------
# Startup
# -------------------------------------------------------------------
@app.on_event("startup")
async def on_startup():
    # Only run DDL in environments that allow it (local/dev)
    if settings.RUN_DDL_ON_START:
        await init_db()
    if settings.SEED_ON_START:
        async with AsyncSessionLocal() as db:
            await seed_if_empty(db)

# -------------------------------------------------------------------
# Missing workspace -> bare 500
# -------------------------------------------------------------------
@app.exception_handler(WorkspaceNotFound)
async def handle_workspace_not_found(request: Request, exc: WorkspaceNotFound):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return PlainTextResponse(str(exc), status_code=500)


def run():
    import uvicorn

    uvicorn.run("opportunity_api.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
