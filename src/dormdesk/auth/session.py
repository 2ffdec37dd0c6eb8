"""Admin credential check, tenant lookup and role-tagged sessions."""

import hmac
from dataclasses import dataclass
from typing import Optional, Union

from ..core.enums import ActorRole, SessionRole
from ..domain.models import Tenant
from ..store.domain_store import DomainStore
from ..utils.logging_config import get_logger

logger = get_logger("auth")


@dataclass(frozen=True)
class Session:
    """Resolved identity held by the client after a successful login.

    Admin sessions carry no tenant; tenant sessions carry the tenant as it
    was at login time.
    """

    role: SessionRole
    tenant: Optional[Tenant] = None

    @classmethod
    def admin(cls) -> "Session":
        return cls(role=SessionRole.ADMIN)

    @classmethod
    def for_tenant(cls, tenant: Tenant) -> "Session":
        return cls(role=SessionRole.TENANT, tenant=tenant)

    @property
    def is_admin(self) -> bool:
        return self.role == SessionRole.ADMIN

    @property
    def actor(self) -> ActorRole:
        """Audit label for actions taken under this session."""
        return ActorRole.ADMIN if self.is_admin else ActorRole.TENANT


def parse_room_id(room_id: Union[int, str, None]) -> Optional[int]:
    """Coerce a room id given as an int or numeric string; anything else is None."""
    if isinstance(room_id, bool) or room_id is None:
        return None
    if isinstance(room_id, int):
        return room_id
    try:
        return int(str(room_id).strip())
    except ValueError:
        return None


def _matches(supplied: str, expected: str) -> bool:
    return hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))


class SessionResolver:
    """Validates logins against the configured admin and the domain store."""

    def __init__(self, store: DomainStore, admin_email: str, admin_password: str):
        self.store = store
        self._admin_email = admin_email
        self._admin_password = admin_password

    async def login_admin(self, email: str, password: str) -> bool:
        """
        Check the admin credential pair.

        Fails closed on any mismatch. Both outcomes are written to the audit
        log: "Admin Login" on success, "Failed Login" on failure.
        """
        email = email or ""
        password = password or ""
        # Evaluate both comparisons so timing does not reveal which one failed
        email_ok = _matches(email, self._admin_email)
        password_ok = _matches(password, self._admin_password)
        success = bool(self._admin_email) and email_ok and password_ok

        if success:
            await self.store.record_event(
                "Admin Login", "Admin user logged in successfully.", ActorRole.ADMIN
            )
            logger.info("Admin login succeeded")
        else:
            await self.store.record_event(
                "Failed Login", f"Failed login attempt for email: {email}.", ActorRole.SYSTEM
            )
            logger.warning(f"Admin login failed for email {email!r}")
        return success

    async def find_tenant(
        self, name: str, room_id: Union[int, str, None]
    ) -> Optional[Tenant]:
        """
        Look up a tenant by name and room.

        The name match ignores case and surrounding whitespace; the room must
        match exactly. If several tenants share a name in the same room the
        first one wins. Failed lookups are audited as "Failed Tenant Login".
        """
        parsed_room = parse_room_id(room_id)
        tenant = None
        if parsed_room is not None:
            tenant = await self.store.find_tenant(name, parsed_room)

        if tenant is not None:
            await self.store.record_event(
                "Tenant Login", f"Tenant '{tenant.name}' logged in.", ActorRole.TENANT
            )
            logger.info(f"Tenant login: {tenant.id} (room {tenant.room_id})")
        else:
            await self.store.record_event(
                "Failed Tenant Login",
                f"No tenant named '{(name or '').strip()}' found in Room {room_id}.",
                ActorRole.SYSTEM,
            )
            logger.warning(f"Tenant login failed for room {room_id!r}")
        return tenant

    async def resolve_admin(self, email: str, password: str) -> Optional[Session]:
        """Return an admin session, or None if the credentials are wrong."""
        if await self.login_admin(email, password):
            return Session.admin()
        return None

    async def resolve_tenant(
        self, name: str, room_id: Union[int, str, None]
    ) -> Optional[Session]:
        """Return a tenant session, or None if no tenant matches."""
        tenant = await self.find_tenant(name, room_id)
        if tenant is None:
            return None
        return Session.for_tenant(tenant)
