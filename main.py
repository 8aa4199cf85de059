import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import get_settings
from database import Base, engine
from errors import ClientError, validation_error_response
from utils.logger import setup_api_logger

import models  # noqa: F401  registers the mapped tables on Base
from routes import (
    trips,
    participants,
    trip_invitations,
    activities,
    links,
)

# fails startup when required configuration is missing
settings = get_settings()

Base.metadata.create_all(bind=engine)

app = FastAPI(title="Plann.er API (Trips, Participants, Activities, Links)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# setup file logger for API failures
api_logger = setup_api_logger(settings.log_path)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    api_logger.warning("Validation error on %s %s | errors=%s",
                       request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content=validation_error_response(exc))


@app.exception_handler(ClientError)
async def client_error_handler(request: Request, exc: ClientError):
    api_logger.warning("ClientError on %s %s | status=%s | message=%s",
                       request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    api_logger.warning("HTTPException on %s %s | status=%s | detail=%s",
                       request.method, request.url.path, exc.status_code, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"statusCode": exc.status_code, "error": "ClientError", "message": str(exc.detail)},
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    api_logger.error("Unhandled exception on %s %s | error=%s",
                     request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={
            "statusCode": 500,
            "error": "InternalServerError",
            "message": "Something went wrong on the server.",
        },
    )


app.include_router(trips.router)
app.include_router(participants.router)
app.include_router(trip_invitations.router)
app.include_router(activities.router)
app.include_router(links.router)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
