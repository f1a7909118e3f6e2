from litarchive.ports.clock import ClockPort
from litarchive.ports.store import PublicationStorePort

__all__ = ["ClockPort", "PublicationStorePort"]
