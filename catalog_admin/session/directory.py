"""MongoDB-backed user directory and authenticator for the session manager."""

from motor.motor_asyncio import AsyncIOMotorDatabase

from catalog_admin.auth.service import AuthService
from catalog_admin.utils import Logger
from .models import Session

logger = Logger("session.directory")


class MongoUserDirectory:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.users = db["users"]

    async def find_by_email(self, email: str) -> Session | None:
        # Keyed on email, not uid: a changed email address orphans the session.
        record = await self.users.find_one({"email": email})
        return Session.from_record(record) if record else None


class MongoAuthenticator:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.auth = AuthService(db)

    async def authenticate(self, email: str, password: str) -> Session:
        record = await self.auth.verify_credentials(email, password)
        return Session.from_record(record)

    async def sign_out(self, session: Session | None) -> None:
        # Tokens are stateless; nothing to revoke server side.
        if session is not None:
            logger.info(f"Signed out {session.email}")
