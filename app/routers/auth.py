from fastapi import APIRouter, Form
from fastapi.responses import JSONResponse

from app.dependencies import create_session_token, SESSION_COOKIE, SESSION_MAX_AGE
from boat_log import config

router = APIRouter(tags=["auth"])


@router.post("/login")
async def login(password: str = Form(...)):
    if password and password == config.get_app_password():
        resp = JSONResponse({"message": "Logged in"})
        resp.set_cookie(
            SESSION_COOKIE,
            create_session_token(),
            httponly=True,
            samesite="lax",
            max_age=SESSION_MAX_AGE,
        )
        return resp
    return JSONResponse({"error": "Invalid password"}, status_code=401)


@router.post("/logout")
async def logout():
    resp = JSONResponse({"message": "Logged out"})
    resp.delete_cookie(SESSION_COOKIE)
    return resp
