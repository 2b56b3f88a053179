# server/api/auth.py

from pydantic import BaseModel
from fastapi import APIRouter, Depends, Request, status
from server.core.service import AuthService


# -------------------------------
# Router & Schemas
# -------------------------------

router = APIRouter()


class Credentials(BaseModel):
    """
    Request body for /register and /login.
    Both fields are optional here so that presence is checked by the service
    and answered with a 400 instead of FastAPI's 422.
    """
    username: str | None = None
    password: str | None = None


class Message(BaseModel):
    message: str


class User(BaseModel):
    username: str


class LoginResponse(BaseModel):
    message: str
    user: User


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


# -------------------------------
# Authentication Endpoints
# -------------------------------

@router.post("/register", response_model=Message, status_code=status.HTTP_201_CREATED)
async def register(creds: Credentials, service: AuthService = Depends(get_auth_service)):
    """
    Creates a user record with a bcrypt hash of the password.
    Answers 409 if the username is already taken.
    """
    await service.register(creds.username, creds.password)
    return {"message": "User registered successfully!"}


@router.post("/login", response_model=LoginResponse)
async def login(creds: Credentials, service: AuthService = Depends(get_auth_service)):
    """
    Verifies the password against the stored hash.
    Unknown users and wrong passwords get the same 401.
    """
    username = await service.login(creds.username, creds.password)
    return {"message": "Login successful!", "user": {"username": username}}
