"""Map domain errors to HTTP responses."""

import logging

from fastapi import HTTPException, status

from domain.model.errors import DomainError, ErrorKind

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.DUPLICATE_IDENTITY: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorKind.INFRASTRUCTURE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.CONFIGURATION: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def to_http_exception(error: DomainError) -> HTTPException:
    status_code = STATUS_BY_KIND.get(error.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)

    if error.kind in (ErrorKind.INFRASTRUCTURE, ErrorKind.CONFIGURATION):
        logger.error("Request failed", extra={"errorKind": error.kind.value, "error": str(error)})
        return HTTPException(status_code=status_code, detail="Service unavailable")

    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return HTTPException(status_code=status_code, detail=str(error), headers=headers)
