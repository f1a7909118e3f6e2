"""Rendering of publication errors at the HTTP boundary."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from litarchive.domain.errors import PublicationError

logger = logging.getLogger(__name__)

STATUS_BY_CODE: dict[str, int] = {
    "conflict": status.HTTP_409_CONFLICT,
    "illegal_transition": status.HTTP_409_CONFLICT,
    "login_required": status.HTTP_401_UNAUTHORIZED,
    "forbidden": status.HTTP_403_FORBIDDEN,
    "not_found": status.HTTP_404_NOT_FOUND,
    "invalid_input": status.HTTP_400_BAD_REQUEST,
}


async def publication_error_handler(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, PublicationError)
    status_code = STATUS_BY_CODE.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error("Unmapped publication error %s: %s", exc.code, exc.message)

    headers = {"WWW-Authenticate": "Bearer"} if exc.code == "login_required" else None
    return JSONResponse(
        status_code=status_code,
        content={"code": exc.code, "detail": exc.message},
        headers=headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PublicationError, publication_error_handler)
