from __future__ import annotations

import enum
from datetime import datetime

from .clock import utcnow


class TableStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    RESERVED = "RESERVED"
    OUT_OF_SERVICE = "OUT_OF_SERVICE"


class Table:
    """A seating resource.

    Reading ``status`` expires a reservation whose ``reserved_until`` has
    passed, so callers never see a stale RESERVED table.
    """

    def __init__(
        self,
        number: int,
        capacity: int,
        *,
        status: TableStatus = TableStatus.AVAILABLE,
        customer_id: int | None = None,
        occupied_since: datetime | None = None,
        reserved_until: datetime | None = None,
        notes: str | None = "",
    ) -> None:
        if number <= 0:
            raise ValueError("Table number must be positive")
        if capacity <= 0:
            raise ValueError("Table capacity must be positive")
        self.number = number
        self.capacity = capacity
        self._status = TableStatus(status)
        self.customer_id = customer_id
        self.occupied_since = occupied_since
        self.reserved_until = reserved_until
        self.notes = notes or ""

    @property
    def status(self) -> TableStatus:
        return self.current_status()

    def current_status(self, now: datetime | None = None) -> TableStatus:
        if self.is_reservation_expired(now):
            self.make_available()
        return self._status

    def is_reservation_expired(self, now: datetime | None = None) -> bool:
        if self._status is not TableStatus.RESERVED or self.reserved_until is None:
            return False
        return (now or utcnow()) > self.reserved_until

    def is_available(self, now: datetime | None = None) -> bool:
        return self.current_status(now) is TableStatus.AVAILABLE

    def occupy(self, customer_id: int | None, now: datetime | None = None) -> bool:
        if not self.is_available(now):
            return False
        self._status = TableStatus.OCCUPIED
        self.customer_id = customer_id
        self.occupied_since = now or utcnow()
        self.reserved_until = None
        return True

    def reserve(self, until: datetime | None, now: datetime | None = None) -> bool:
        now = now or utcnow()
        if until is None or until <= now or not self.is_available(now):
            return False
        self._status = TableStatus.RESERVED
        self.reserved_until = until
        self.customer_id = None
        self.occupied_since = None
        return True

    def make_available(self) -> None:
        self._status = TableStatus.AVAILABLE
        self.customer_id = None
        self.occupied_since = None
        self.reserved_until = None

    def set_out_of_service(self, reason: str | None = None) -> None:
        self.make_available()
        self._status = TableStatus.OUT_OF_SERVICE
        self.notes = reason or "Out of service"

    def put_back_in_service(self) -> None:
        if self._status is TableStatus.OUT_OF_SERVICE:
            self.make_available()
            self.notes = ""

    def set_capacity(self, capacity: int) -> None:
        if capacity > 0:
            self.capacity = capacity

    def set_notes(self, notes: str | None) -> None:
        self.notes = notes or ""

    def occupied_minutes(self, now: datetime | None = None) -> int:
        if self._status is not TableStatus.OCCUPIED or self.occupied_since is None:
            return 0
        return int(((now or utcnow()) - self.occupied_since).total_seconds() // 60)

    def __repr__(self) -> str:
        return f"Table({self.number}, capacity={self.capacity}, status={self._status.value})"
