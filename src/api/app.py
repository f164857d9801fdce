from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error - contact support"


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content=error_dict)


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": SERVER_ERROR_MESSAGE}
    logger.error(f"Server error: {exc.base_error.code} ({exc.base_error.message})")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_dict
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    # Absent body, non-object body and non-string fields all count as missing input
    error_dict = {"code": "MISSING_PARAMETER", "message": "Missing required information"}
    logger.warning(f"Client error: {error_dict} on {request.url.path}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_dict)


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title="Credential API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import credentials, health_check

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(
        credentials.router, prefix=ApplicationConfig.API_PREFIX, tags=["Credentials"]
    )

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    return app
