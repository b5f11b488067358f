from fastapi import APIRouter, Depends, Query, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from catalog_admin.config import get_database
from catalog_admin.rbac import can_access_route
from catalog_admin.utils import success_response
from .schemas import LoginRequest, RouteAccessResponse, SignupRequest, TokenResponse
from .service import AuthService

auth_router = APIRouter()


@auth_router.post("/login")
async def login(
    body: LoginRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Authenticate a staff user and return JWT + user data."""
    svc = AuthService(db)
    result = await svc.authenticate(email=body.email, password=body.password)
    token = TokenResponse(**result)
    return success_response(data=token.model_dump(), message="Login successful")


@auth_router.post("/signup")
async def signup(
    body: SignupRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Register a staff account; a master must approve it by assigning a role."""
    svc = AuthService(db)
    user = await svc.signup(body.model_dump())
    return success_response(data=user, message="Signup received, awaiting approval", code=201)


@auth_router.get("/me")
async def me(
    request: Request,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    svc = AuthService(db)
    profile = await svc.me(request.state.user.get("sub", ""))
    return success_response(data=profile)


@auth_router.get("/route-access")
async def route_access(request: Request, path: str = Query(..., min_length=1)):
    role = getattr(request.state, "user_role", None)
    result = RouteAccessResponse(path=path, role=role, allowed=can_access_route(role, path))
    return success_response(data=result.model_dump())
