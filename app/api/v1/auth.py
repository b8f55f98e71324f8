"""Auth API router — registration and JWT login.
/api/v1/auth"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db
from app.api.responses import ok
from app.schemas.auth_schema import LoginRequest, RegisterRequest, RegisterResponse, TokenResponse
from app.schemas.base_schema import ApiResponse
from app.services.auth_service import authenticate, register_user

router = APIRouter()


@router.post("/register", response_model=ApiResponse[RegisterResponse], status_code=201)
async def register(payload: RegisterRequest, db: AsyncSession = Depends(get_db)):
    user = await register_user(db, payload)
    return ok(RegisterResponse(id=user.id, name=user.name, email=user.email), "User registered successfully")


@router.post("/login", response_model=ApiResponse[TokenResponse])
async def login(payload: LoginRequest, db: AsyncSession = Depends(get_db)):
    return ok(await authenticate(db, payload), "Login successful")
