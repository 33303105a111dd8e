from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from .error import ClientError, ServerError, to_http_error
from organizations.domain.errors import OrganizationError
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_organization_error(request: Request, exc: OrganizationError):
    http_error = to_http_error(exc)
    if isinstance(http_error, ServerError):
        return await handle_server_error(request, http_error)
    return await handle_client_error(request, http_error)


def install_error_handlers(app: FastAPI) -> FastAPI:
    """Map domain errors raised by use cases inside the host app's routes"""
    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(OrganizationError, handle_organization_error)
    return app
