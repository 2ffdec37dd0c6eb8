"""In-memory state: the domain store and its audit recorder."""

from .audit import AuditRecorder
from .domain_store import DomainStore, StoreSnapshot

__all__ = ["AuditRecorder", "DomainStore", "StoreSnapshot"]
