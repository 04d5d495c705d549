"""Identity store — persistence for user and agent accounts.

Learn: Service layer separates business logic from HTTP routing.
Route handlers call the store, the store calls the database. Handlers
never build queries themselves, and the store never knows about
requests, cookies or templates.

Error mapping:
- unique email violation → Conflict
- row gone between read and write → NotFound
- any other SQLAlchemyError propagates unchanged; the caller decides
  how to report it (always as InternalError in the route layer)
"""

import uuid
from typing import Optional

import structlog
from fastapi import Depends
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from tripdesk.auth.password import hash_password, verify_password
from tripdesk.auth.roles import Role
from tripdesk.db.engine import get_db
from tripdesk.db.models import User
from tripdesk.errors import Conflict, NotFound
from tripdesk.schemas.identity import AgentProfileUpdate, AgentRegistration

logger = structlog.get_logger()


class IdentityStore:
    """CRUD and credential checks for User records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Lookups ────────────────────────────────────────

    async def get(self, user_id: uuid.UUID) -> Optional[User]:
        """Load a record by id, always re-reading the row from the database."""
        return await self.db.get(User, user_id, populate_existing=True)

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(User.email == email.strip().lower())
        )
        return result.scalars().first()

    # ─── Create ─────────────────────────────────────────

    async def create_agent(self, data: AgentRegistration) -> User:
        """Insert a new agent account. Raises Conflict if the email is taken."""
        if await self.find_by_email(data.email):
            raise Conflict("Agent with this email already exists")

        user = User(
            username=data.username,
            email=data.email,
            password_hash=hash_password(data.password),
            role=Role.AGENT,
            agent_id=data.agent_id,
            agency=data.agency,
            phone=data.phone,
        )
        self.db.add(user)
        await self._commit(conflict_message="Agent with this email already exists")
        logger.info("identity.created", user_id=str(user.id), role=user.role.value)
        return user

    # ─── Update ─────────────────────────────────────────

    async def update_agent_profile(
        self, user_id: uuid.UUID, data: AgentProfileUpdate
    ) -> User:
        """Replace every editable profile field of the record.

        Learn: The record is re-read first. If it was deleted in the
        meantime we raise NotFound instead of writing — an UPDATE can
        never bring a deleted account back.
        """
        user = await self.get(user_id)
        if not user:
            raise NotFound("Agent not found")

        user.username = data.username
        user.email = data.email
        user.agent_id = data.agent_id
        user.phone = data.phone
        user.agency = data.agency
        user.bio = data.bio
        await self._commit(conflict_message="Email is already in use")
        return user

    async def set_password(self, user: User, new_password: str) -> User:
        user.password_hash = hash_password(new_password)
        await self._commit()
        return user

    # ─── Delete ─────────────────────────────────────────

    async def delete(self, user_id: uuid.UUID) -> bool:
        """Permanently remove a record. Returns False if it was already gone."""
        result = await self.db.execute(delete(User).where(User.id == user_id))
        await self.db.commit()
        return result.rowcount > 0

    # ─── Credentials ────────────────────────────────────

    @staticmethod
    def check_password(user: User, password: str) -> bool:
        return verify_password(password, user.password_hash)

    async def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return the account for these credentials, or None."""
        user = await self.find_by_email(email)
        if not user or not self.check_password(user, password):
            return None
        return user

    # ─── Internal ───────────────────────────────────────

    async def _commit(self, conflict_message: Optional[str] = None) -> None:
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise Conflict(conflict_message)
        except StaleDataError:
            await self.db.rollback()
            raise NotFound("Agent not found")
        except SQLAlchemyError:
            await self.db.rollback()
            raise


def get_identity_store(db: AsyncSession = Depends(get_db)) -> IdentityStore:
    """FastAPI dependency — one store per request, sharing the request's session."""
    return IdentityStore(db)
