"""Map domain failure kinds to HTTP status codes"""

from fastapi import HTTPException

from rent_reminder.domain.exceptions import DomainException, ErrorKind

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 422,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.COLLABORATOR: 503,
    ErrorKind.INVARIANT: 500,
    ErrorKind.INTERNAL: 500,
}


def to_http_exception(exc: DomainException) -> HTTPException:
    status_code = STATUS_BY_KIND[exc.kind]
    detail = str(exc) if status_code < 500 else "Internal server error"
    if exc.kind is ErrorKind.COLLABORATOR:
        detail = "Downstream service unavailable"
    return HTTPException(status_code=status_code, detail=detail)
