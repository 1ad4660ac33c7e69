from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


class AgroSimError(Exception):
    status_code = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class InvalidInput(AgroSimError):
    """Missing or malformed query parameters or body fields."""

    status_code = 400


class InternalFailure(AgroSimError):
    """Unexpected failure while fetching environmental data or scoring."""

    status_code = 500

    @classmethod
    def wrap(cls, message: str, exc: Exception) -> "InternalFailure":
        return cls(message, details=str(exc) or exc.__class__.__name__)


def agrosim_error_handler(request: Request, exc: AgroSimError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "loc": list(error.get("loc", ())),
            "msg": error.get("msg"),
            "type": error.get("type"),
        }
        for error in exc.errors()
    ]
    invalid = InvalidInput("Invalid request", details=jsonable_encoder(errors))
    return agrosim_error_handler(request, invalid)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AgroSimError, agrosim_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
