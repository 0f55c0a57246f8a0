"""FastAPI application exposing the card form flow compiler."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dotenv import load_dotenv
load_dotenv()  # load environment variables from .env file (before routers read them)

from cardflow_server.flowchart_routes import router as flowchart_router
from cardflow_server.template_routes import router as template_router

# CORS origins - configurable via environment variable
# Use comma-separated values for multiple origins, or "*" for all (development only)
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")
LOG_LEVEL = os.getenv("CARDFLOW_LOG_LEVEL", "INFO").upper()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup."""
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("cardflow API starting (log level %s)", LOG_LEVEL)
    yield


app = FastAPI(
    title="Cardflow API",
    description="Validate, linearize, build and merge card form flow graphs",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# include routes
app.include_router(flowchart_router, prefix="/api")
app.include_router(template_router, prefix="/api")


@app.get("/")
def root():
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": "0.1.0",
        "endpoints": {
            "flowcharts": "/api/flowcharts",
            "templates": "/api/templates",
        },
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
