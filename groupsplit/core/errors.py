"""Domain errors and the handlers that render them as JSON envelopes."""
import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class GroupsplitError(Exception):
    """Base class for errors raised by the stats service."""
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class GroupNotFoundError(GroupsplitError):
    """Group id is malformed or no such group exists."""
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, group_id: str):
        super().__init__(f"Group not found: {group_id}")
        self.group_id = group_id


async def groupsplit_error_handler(request: Request, exc: GroupsplitError) -> JSONResponse:
    logger.warning("[%s] %s >> %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Upstream failures (database unavailable, bad stored data) end up here.
    # The server re-raises after this handler and logs the traceback itself.
    logger.error(
        "[%s] %s >> %s",
        request.method,
        request.url.path,
        exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "message": "Internal Server Error"},
    )
