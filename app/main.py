import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.api.v1.api import api_router
from app.core.config import settings
from app.core.exceptions import GENERIC_ERROR_MESSAGE, AppError
from app.core.logging import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    openapi_url=f"{settings.api_prefix}/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    message = exc.message if exc.message else GENERIC_ERROR_MESSAGE
    return JSONResponse(status_code=exc.status_code, content={"message": message})

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected malformed body on {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"message": "Malformed request body."})

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"message": GENERIC_ERROR_MESSAGE})

app.include_router(api_router, prefix=settings.api_prefix)

@app.get("/")
async def root():
    return {"message": "BZBookit Backend Running"}
