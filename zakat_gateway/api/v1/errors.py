"""Translate domain failures into HTTP errors"""

import logging

from fastapi import HTTPException

from zakat_gateway.domain.exceptions import (
    DomainException,
    InvalidInputError,
    MalformedProviderDataError,
    ProviderUnavailableError,
)
from zakat_gateway.infrastructure.observability.metrics import record_provider_failure


def to_http_exception(error: DomainException, request_id: str) -> HTTPException:
    """Log a domain failure and return the HTTPException the caller should see"""
    if isinstance(error, InvalidInputError):
        logging.warning(f"Invalid input: {error}", extra={"request_id": request_id})
        return HTTPException(status_code=422, detail=str(error))

    if isinstance(error, MalformedProviderDataError):
        record_provider_failure(error.provider)
        logging.error(f"Malformed provider data: {error}", extra={"request_id": request_id, "provider": error.provider})
        return HTTPException(status_code=502, detail=f"{error.provider} returned malformed data")

    if isinstance(error, ProviderUnavailableError):
        record_provider_failure(error.provider)
        logging.error(f"Provider unavailable: {error}", extra={"request_id": request_id, "provider": error.provider})
        return HTTPException(status_code=503, detail=f"{error.provider} unavailable")

    logging.error(f"Unhandled domain error: {error}", extra={"request_id": request_id})
    return HTTPException(status_code=500, detail="Internal server error")
