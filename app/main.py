import logging
import sqlite3
from contextlib import asynccontextmanager
from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.dependencies import verify_session_token, is_public, SESSION_COOKIE
from app.routers import auth, bookings, inventory, logs
from boat_log import config
from boat_log.core.errors import BoatLogError
from boat_log.db.database import Database

logging.basicConfig(
    level=config.get_log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    db = Database(config.get_db_path())
    db.init_schema()
    app.state.db = db
    if not config.auth_enabled():
        logger.warning("APP_PASSWORD is not set; the API is open to anyone who can reach it")
    yield


app = FastAPI(lifespan=lifespan, title="Boat Log")


@app.middleware("http")
async def auth_middleware(request: Request, call_next):
    if config.auth_enabled() and not is_public(request.url.path):
        token = request.cookies.get(SESSION_COOKIE)
        if not token or not verify_session_token(token):
            return JSONResponse({"error": "Not authenticated"}, status_code=401)
    return await call_next(request)


@app.exception_handler(BoatLogError)
async def boat_log_error_handler(request: Request, exc: BoatLogError):
    return JSONResponse({"error": str(exc)}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse({"error": "Request body must be a JSON object"}, status_code=400)


@app.exception_handler(sqlite3.Error)
async def store_error_handler(request: Request, exc: sqlite3.Error):
    logger.error("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


app.include_router(auth.router)
app.include_router(bookings.router)
app.include_router(inventory.router)
app.include_router(logs.router)
