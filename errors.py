"""Expected failures raised by route handlers.

``ClientError`` covers business-rule violations (not found, forbidden,
conflict, bad dates). The handlers in ``main.py`` turn it, and request
validation errors, into the JSON error envelope.
"""
from typing import Dict, List

from fastapi.exceptions import RequestValidationError


class ClientError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def to_response(self) -> dict:
        return {
            "statusCode": self.status_code,
            "error": "ClientError",
            "message": self.message,
        }


def validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "statusCode": 400,
        "error": "ValidationError",
        "message": "Invalid input",
        "details": field_errors(exc),
    }


def field_errors(exc: RequestValidationError) -> Dict[str, List[str]]:
    """Group validation messages by field name, dropping the body/query/path prefix."""
    details: Dict[str, List[str]] = {}
    for error in exc.errors():
        loc = [str(part) for part in error["loc"]]
        if len(loc) > 1 and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        details.setdefault(".".join(loc), []).append(error["msg"])
    return details
