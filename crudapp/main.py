# crudapp/main.py

"""
FastAPI Product Service API.
Manages products through a small CRUD API under /api/products. The storage
repository is built here, at startup, and handed to the request handler.
"""
import os
import logging
import sys
import time
from typing import Optional

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import OperationalError

from .api import ProductHandler, build_router
from .db import SessionLocal, init_db
from .repository import ProductRepository, SqlAlchemyProductRepository

# -----------------------------
# Configure Logging
# -----------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

# Suppress noisy logs from third-party libraries for cleaner output
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("uvicorn.error").setLevel(logging.INFO)

# Load environment variables
CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]
DB_CONNECT_MAX_RETRIES = int(os.getenv("DB_CONNECT_MAX_RETRIES", "10"))
DB_CONNECT_RETRY_DELAY_SECONDS = int(os.getenv("DB_CONNECT_RETRY_DELAY_SECONDS", "5"))
APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
APP_PORT = int(os.getenv("APP_PORT", "8081"))


def create_tables_with_retry(
    max_retries: int = DB_CONNECT_MAX_RETRIES,
    retry_delay_seconds: int = DB_CONNECT_RETRY_DELAY_SECONDS,
):
    """
    Ensures database tables are created (if not exist).
    Retries while the database is unreachable and exits the process when it
    stays unreachable after `max_retries` attempts.
    """
    for i in range(max_retries):
        try:
            logger.info(
                f"Attempting to connect to the database and create tables (attempt {i+1}/{max_retries})..."
            )
            init_db()
            logger.info("Successfully connected to the database and ensured tables exist.")
            break
        except OperationalError as e:
            logger.warning(f"Failed to connect to the database: {e}")
            if i < max_retries - 1:
                logger.info(f"Retrying in {retry_delay_seconds} seconds...")
                time.sleep(retry_delay_seconds)
            else:
                logger.critical(
                    f"Failed to connect to the database after {max_retries} attempts. Exiting application."
                )
                sys.exit(1)
        except Exception as e:
            logger.critical(
                f"An unexpected error occurred during database startup: {e}",
                exc_info=True,
            )
            sys.exit(1)


def create_app(repository: Optional[ProductRepository] = None) -> FastAPI:
    """
    Builds the FastAPI application around a product repository.

    When no repository is given, a SQLAlchemy-backed one is created over the
    configured database, and the products table is created on startup.
    """
    app = FastAPI(
        title="Product Service API",
        description="Create, read, update and delete products",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if repository is None:
        repository = SqlAlchemyProductRepository(SessionLocal)

        @app.on_event("startup")
        async def startup_event():
            create_tables_with_retry()

    logger.info(f"Product Service: using {type(repository).__name__}.")

    # --- Root Endpoint ---
    @app.get("/", status_code=status.HTTP_200_OK, summary="Root endpoint")
    async def read_root():
        """
        Returns a welcome message for the Product Service.
        """
        return {"message": "Welcome to the Product Service!"}

    # --- Health Check Endpoint ---
    @app.get("/health", status_code=status.HTTP_200_OK, summary="Health check endpoint")
    async def health_check():
        """
        A simple health check endpoint to verify the service is running.
        """
        return {"status": "ok", "service": "product-service"}

    app.include_router(build_router(ProductHandler(repository)))
    return app


app = create_app()


def run():
    """Starts the service with uvicorn."""
    import uvicorn

    uvicorn.run("crudapp.main:app", host=APP_HOST, port=APP_PORT)
