import logging
from contextlib import contextmanager
from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


# --- Application errors ---
# Every error leaves the API as {"error": <message>} with the status below.

class AppError(Exception):
  status_code = 500

  def __init__(self, message: str):
    super().__init__(message)
    self.message = message


class ValidationError(AppError):
  status_code = 400


class NotFoundError(AppError):
  status_code = 404


class ConflictError(AppError):
  status_code = 409


class StoreError(AppError):
  """The store failed. The message is generic; the cause is only logged."""
  status_code = 500


@contextmanager
def store_errors(db, message: str):
  """
  Turn a failed store operation into a StoreError.
  The session is rolled back and the real cause goes to the log only.
  """
  try:
    yield
  except SQLAlchemyError as e:
    db.rollback()
    logger.exception(f"{message}: {e}")
    raise StoreError(message) from e


# --- Exception handlers ---

async def app_error_handler(request: Request, exc: AppError):
  return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def http_exception_handler(request: Request, exc: HTTPException):
  return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError):
  problems = []
  for err in exc.errors():
    location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
    problems.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))
  return JSONResponse(status_code=400, content={"error": "Invalid request: " + "; ".join(problems)})


async def unhandled_exception_handler(request: Request, exc: Exception):
  logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
  return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_exception_handlers(app: FastAPI):
  app.add_exception_handler(AppError, app_error_handler)
  app.add_exception_handler(HTTPException, http_exception_handler)
  app.add_exception_handler(RequestValidationError, request_validation_handler)
  app.add_exception_handler(Exception, unhandled_exception_handler)
