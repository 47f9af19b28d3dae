import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
from database import check_connection, init_db
from routers import (
    activities_router,
    auth_router,
    dashboard_router,
    properties_router,
    tenants_router,
)
from services.errors import StoreError

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("rentledger")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if config.AUTO_CREATE_TABLES:
        init_db()
        logger.info("Database tables ensured")
    yield


# App instance
app = FastAPI(title="RentLedger", version="1.0.0", lifespan=lifespan)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    # The request session has already rolled back; nothing was half-written
    logger.error("Store error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content={"detail": "The ledger store is unavailable. Please try again."},
    )


@app.get("/health")
def health():
    return {"status": "ok", "database": check_connection()}


app.include_router(auth_router)
app.include_router(properties_router)
app.include_router(tenants_router)
app.include_router(activities_router)
app.include_router(dashboard_router)


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=config.PORT, reload=True)
