from fastapi import Depends, Request
from itsdangerous import BadSignature, URLSafeTimedSerializer

from boat_log import config
from boat_log.core.bookings import BookingRepository
from boat_log.core.inventory import InventoryRepository
from boat_log.core.logbook import LogRepository
from boat_log.db.database import Database

SESSION_COOKIE = "boat_session"
SESSION_MAX_AGE = 60 * 60 * 24 * 7  # 7 days


def _get_signer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(config.get_secret_key())


def create_session_token() -> str:
    return _get_signer().dumps("ok")


def verify_session_token(token: str) -> bool:
    try:
        _get_signer().loads(token, max_age=SESSION_MAX_AGE)
        return True
    except BadSignature:
        return False


# Paths that don't require auth
_PUBLIC_PATHS = frozenset({"/login", "/logout"})


def is_public(path: str) -> bool:
    return path in _PUBLIC_PATHS


# ── Store handles ──────────────────────────────────────────────────────────────

def get_db(request: Request) -> Database:
    """The Database built at startup and kept on app.state."""
    return request.app.state.db


def get_bookings(db: Database = Depends(get_db)) -> BookingRepository:
    return BookingRepository(db)


def get_inventory(db: Database = Depends(get_db)) -> InventoryRepository:
    return InventoryRepository(db)


def get_logs(db: Database = Depends(get_db)) -> LogRepository:
    return LogRepository(db)
