# api/main.py

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from .campaigns   import router as campaigns_router
from .config      import get_settings
from .errors      import NotFoundError, ReferentialIntegrityError
from .health      import router as health_router
from .influencers import router as influencers_router
from .sponsors    import router as sponsors_router

settings = get_settings()
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Influencer Sponsor Marketplace",
    description="RPC-style procedures under /api for influencers, sponsors, products and campaigns",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

for router in (health_router, influencers_router, sponsors_router, campaigns_router):
    app.include_router(router, prefix=settings.api_prefix)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(ReferentialIntegrityError)
async def reference_handler(request: Request, exc: ReferentialIntegrityError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(IntegrityError)
async def constraint_handler(request: Request, exc: IntegrityError):
    # unique violations surface the database's own message
    return JSONResponse(status_code=409, content={"detail": str(exc.orig)})


if __name__ == "__main__":
    import uvicorn

    logger.info("Marketplace API listening at port: %s", settings.server_port)
    uvicorn.run(app, host="0.0.0.0", port=settings.server_port)
