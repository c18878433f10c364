import logging

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class APIException(HTTPException):
    status_code_default = 400

    def __init__(self, detail: str, status_code: int = None):
        super().__init__(status_code=status_code or self.status_code_default, detail=detail)


class ValidationError(APIException):
    """Malformed or missing input, unparsable date/time, past dates, working hours."""
    status_code_default = 400


class ForbiddenError(APIException):
    status_code_default = 403


class NotFoundError(APIException):
    status_code_default = 404


class ConflictError(APIException):
    """Slot already held by a live appointment."""
    status_code_default = 409


class InternalError(APIException):
    status_code_default = 500


def create_error_response(error_message: str, status_code: int = 400) -> dict:
    """Create a standardized error response"""
    return {
        "success": False,
        "data": None,
        "error": error_message
    }


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Custom exception handler for HTTPException"""
    if exc.status_code >= 500:
        logger.warning(f"{request.method} {request.url.path} failed: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.detail, exc.status_code)
    )


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Missing or mistyped request fields are a 400 for API clients"""
    missing = [
        ".".join(str(part) for part in err.get("loc", ())[1:])
        for err in exc.errors()
        if err.get("type") == "missing"
    ]
    if missing:
        message = f"Missing required fields: {', '.join(missing)}"
    else:
        first = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(part) for part in first.get("loc", ())[1:])
        message = f"Invalid field {field}: {first.get('msg', 'invalid value')}"
    return JSONResponse(status_code=400, content=create_error_response(message, 400))
