"""API routes: CRUD over /api/users."""
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.errors import UserNotFoundError
from app.db.session import get_db
from app.models.user import User
from app.schemas.user import ErrorSchema, MessageSchema, UserInSchema, UserOutSchema
from app.services import users as user_service

router = APIRouter(
    prefix="/api/users",
    tags=["users"],
    responses={
        422: {"model": ErrorSchema},
        500: {"model": ErrorSchema},
        503: {"model": ErrorSchema},
    },
)

DELETED_MESSAGE = "Usuario eliminado"

# ids outside the store's 32-bit INTEGER column never reach the driver
UserId = Annotated[int, Path(ge=-2_147_483_648, le=2_147_483_647)]


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def _single_user(user: User | None, settings: Settings) -> dict:
    """Serialize one record; a missing one is {} unless strict mode is on."""
    if user is None:
        if settings.strict_not_found:
            raise UserNotFoundError()
        return {}
    return UserOutSchema.model_validate(user).model_dump()


@router.get("", response_model=list[UserOutSchema])
async def list_users(db: Annotated[AsyncSession, Depends(get_db)]):
    """All users, in the store's scan order."""
    return await user_service.list_users(db)


@router.get("/{user_id}", responses={200: {"model": UserOutSchema}, 404: {"model": ErrorSchema}})
async def get_user(
    user_id: UserId,
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> dict:
    user = await user_service.get_user(db, user_id)
    return _single_user(user, settings)


@router.post("", response_model=UserOutSchema, status_code=201)
async def create_user(
    db: Annotated[AsyncSession, Depends(get_db)],
    body: UserInSchema | None = None,
):
    body = body or UserInSchema()
    return await user_service.create_user(db, body.nombre, body.correo)


@router.put("/{user_id}", responses={200: {"model": UserOutSchema}, 404: {"model": ErrorSchema}})
async def update_user(
    user_id: UserId,
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    body: UserInSchema | None = None,
) -> dict:
    """Replace both fields; omitted ones become null."""
    body = body or UserInSchema()
    user = await user_service.update_user(db, user_id, body.nombre, body.correo)
    return _single_user(user, settings)


@router.delete("/{user_id}", response_model=MessageSchema)
async def delete_user(user_id: UserId, db: Annotated[AsyncSession, Depends(get_db)]):
    await user_service.delete_user(db, user_id)
    return MessageSchema(message=DELETED_MESSAGE)
