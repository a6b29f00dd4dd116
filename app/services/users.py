"""User persistence: one statement per operation, no retries."""
from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User


async def list_users(db: AsyncSession) -> list[User]:
    result = await db.execute(select(User))
    return list(result.scalars().all())


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def create_user(db: AsyncSession, nombre: str | None, correo: str | None) -> User:
    result = await db.execute(
        insert(User).values(nombre=nombre, correo=correo).returning(User)
    )
    user = result.scalar_one()
    await db.commit()
    return user


async def update_user(
    db: AsyncSession,
    user_id: int,
    nombre: str | None,
    correo: str | None,
) -> User | None:
    """Overwrite both fields; returns None when no row has that id."""
    result = await db.execute(
        update(User)
        .where(User.id == user_id)
        .values(nombre=nombre, correo=correo)
        .returning(User)
    )
    user = result.scalar_one_or_none()
    await db.commit()
    return user


async def delete_user(db: AsyncSession, user_id: int) -> None:
    # deleting a missing id is not an error
    await db.execute(delete(User).where(User.id == user_id))
    await db.commit()
