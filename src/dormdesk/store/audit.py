"""Append-only audit log writer."""

from typing import List, Union

from ..core.enums import ActorRole
from ..domain.models import AuditLogEntry, new_id
from ..utils.logging_config import get_logger


class AuditRecorder:
    """Keeps the audit trail, most recent entry first.

    Entries are frozen models and the recorder offers no way to change or
    remove one once written.
    """

    def __init__(self):
        self._entries: List[AuditLogEntry] = []
        self.logger = get_logger(__name__)

    def record(
        self, action: str, details: str, user: Union[ActorRole, str] = ActorRole.ADMIN
    ) -> AuditLogEntry:
        """Prepend a new entry and return it."""
        label = user.value if isinstance(user, ActorRole) else str(user)
        entry = AuditLogEntry(id=new_id("log"), user=label, action=action, details=details)
        self._entries.insert(0, entry)
        self.logger.info(f"[{label}] {action}: {details}")
        return entry

    def entries(self) -> List[AuditLogEntry]:
        """Return all entries, most recent first."""
        return list(self._entries)

    def clear(self) -> None:
        """Drop every entry. Only used when the store is re-seeded."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
