"""Main FastAPI application."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.schemas.common import ErrorDetail, ErrorResponse
from app.services.dividends.exceptions import InvalidDividendDataError
from app.services.repositories import DuplicateError, NotFoundError

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Dividend Tracker API",
    description="Dividend income projections and portfolio valuation",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(
    request: Request, status_code: int, error: str, message: str, field: str | None = None
) -> JSONResponse:
    body = ErrorResponse(
        error=error,
        message=message,
        details=[ErrorDetail(field=field, message=message)] if field else None,
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error_response(request, status.HTTP_404_NOT_FOUND, "NotFound", str(exc))


@app.exception_handler(DuplicateError)
async def duplicate_handler(request: Request, exc: DuplicateError) -> JSONResponse:
    return _error_response(request, status.HTTP_409_CONFLICT, "Duplicate", str(exc), exc.field)


@app.exception_handler(InvalidDividendDataError)
async def invalid_data_handler(request: Request, exc: InvalidDividendDataError) -> JSONResponse:
    logger.warning(f"Rejected invalid data on {request.url.path}: {exc}")
    return _error_response(
        request, status.HTTP_422_UNPROCESSABLE_ENTITY, "InvalidData", str(exc), exc.field
    )


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Dividend Tracker API", "version": "0.1.0", "status": "running"}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Import and include routers
from app.routers import (
    accounts,
    dashboard,
    dividends,
    holdings,
    portfolios,
    prices,
    projections,
)

app.include_router(accounts.router)
app.include_router(dashboard.router)
app.include_router(dividends.router)
app.include_router(holdings.router)
app.include_router(portfolios.router)
app.include_router(prices.router)
app.include_router(projections.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, reload=True)
