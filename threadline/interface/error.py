"""Interface layer error mapping."""

import logfire
from fastapi import HTTPException, status

from threadline.domain.error import (
    DomainError,
    ItemSourceNetworkError,
    NotFoundError,
    StoryNotOpenError,
)


def to_http_exception(error: DomainError | ValueError) -> HTTPException:
    """Map a domain or validation error to an HTTP error response.

    Args:
        error: Error raised by a use case

    Returns:
        HTTPException to raise from the route
    """
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, StoryNotOpenError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    if isinstance(error, ItemSourceNetworkError):
        logfire.warn("Item source unavailable", error=str(error))
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(error))
    if isinstance(error, ValueError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))

    logfire.error("Unhandled domain error", error=str(error), error_type=type(error).__name__)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal error"
    )
