from fastapi import APIRouter, Body, Depends

from app.dependencies import get_logs
from boat_log.core.errors import NotFoundError
from boat_log.core.logbook import LogRepository
from boat_log.core.validation import parse_id, validate_log_create, validate_log_update

router = APIRouter(prefix="/logs", tags=["logs"])


@router.get("")
def logs_list(logs: LogRepository = Depends(get_logs)):
    return logs.get_all()


@router.post("", status_code=201)
def logs_create(body: dict = Body(...), logs: LogRepository = Depends(get_logs)):
    return logs.add(validate_log_create(body))


@router.get("/{log_id}")
def logs_get(log_id: str, logs: LogRepository = Depends(get_logs)):
    entry = logs.get(parse_id(log_id, "log"))
    if entry is None:
        raise NotFoundError("Log not found")
    return entry


@router.put("/{log_id}")
def logs_update(log_id: str, body: dict = Body(...), logs: LogRepository = Depends(get_logs)):
    entry = logs.update(parse_id(log_id, "log"), validate_log_update(body))
    if entry is None:
        raise NotFoundError("Log not found")
    return entry


@router.delete("/{log_id}")
def logs_delete(log_id: str, logs: LogRepository = Depends(get_logs)):
    logs.delete(parse_id(log_id, "log"))
    return {"message": "Log deleted successfully"}
