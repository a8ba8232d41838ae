from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from wikimasters.db.models import User


class UserRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, user_id: str) -> User | None:
        return await self._session.get(User, user_id)

    async def ensure_exists(
        self, *, user_id: str, name: str | None, email: str | None
    ) -> User:
        # Mirror the identity provider profile; only overwrite fields the token carried.
        user = await self._session.get(User, user_id)
        if user is None:
            user = User(id=user_id, name=name, email=email)
            self._session.add(user)
        else:
            if name is not None:
                user.name = name
            if email is not None:
                user.email = email
        await self._session.flush()
        return user
