# File: src/parklot/domain/aggregates.py
"""
Aggregate Root for the Parking Lot System
Following Domain-Driven Design (DDD) Aggregate Pattern

ParkingLot owns the parked vehicles, enforces the fixed capacity and
accumulates the revenue of the current session. All changes go through
the aggregate root, which records a domain event for each of them.
"""

from dataclasses import dataclass
from typing import List, Optional, Iterable, Tuple
import logging

from .models import (
    VehicleRecord, Money, Timestamp,
    LotFullError, VehicleNotFoundError
)
from .events import (
    DomainEvent, VehicleAdmittedEvent, AdmissionRejectedEvent, VehicleReleasedEvent
)


LOT_CAPACITY = 7


# ============================================================================
# BASE AGGREGATE ROOT
# ============================================================================

class AggregateRoot:
    """
    Base class for aggregate roots
    Provides domain event collection
    """

    def __init__(self):
        self._changes: List[DomainEvent] = []
        self._logger = logging.getLogger(self.__class__.__name__)

    def _add_domain_event(self, event: DomainEvent) -> None:
        """Add a domain event to the list of changes"""
        self._changes.append(event)
        self._logger.debug(f"Added domain event: {event.__class__.__name__}")

    def clear_events(self) -> List[DomainEvent]:
        """Clear and return all domain events"""
        events = self._changes.copy()
        self._changes.clear()
        return events

    @property
    def has_changes(self) -> bool:
        """Check if aggregate has pending domain events"""
        return len(self._changes) > 0


# ============================================================================
# PARKING LOT AGGREGATE
# ============================================================================

@dataclass(frozen=True)
class ReleaseOutcome:
    """Value Object: the released record and the fee it paid"""
    record: VehicleRecord
    fee: Money


@dataclass(frozen=True)
class LotStatus:
    """Value Object: read-only view of the lot at one moment"""
    occupied: int
    capacity: int
    total_revenue: Money
    vehicles: Tuple[VehicleRecord, ...]

    @property
    def is_empty(self) -> bool:
        return self.occupied == 0


class ParkingLot(AggregateRoot):
    """
    Aggregate Root: Parking lot with a fixed number of spaces

    Invariants:
    - the number of parked vehicles never exceeds capacity
    - a release removes at most one record, the first with a matching plate
    """

    def __init__(self, capacity: int = LOT_CAPACITY):
        super().__init__()
        if capacity < 0:
            raise ValueError("Capacity cannot be negative")
        self._capacity = capacity
        self._vehicles: List[VehicleRecord] = []
        self.total_revenue: Money = Money.zero()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def occupied(self) -> int:
        return len(self._vehicles)

    @property
    def is_full(self) -> bool:
        return len(self._vehicles) >= self._capacity

    @property
    def vehicles(self) -> Tuple[VehicleRecord, ...]:
        """Parked vehicles in admission order"""
        return tuple(self._vehicles)

    def admit(self, record: VehicleRecord) -> None:
        """
        Park a vehicle

        Raises LotFullError when there is no free space. The rejected
        record is not kept.
        """
        if self.is_full:
            self._add_domain_event(AdmissionRejectedEvent(
                license_plate=record.identifier,
                category=record.category,
                capacity=self._capacity
            ))
            raise LotFullError(record.identifier, self._capacity)

        self._vehicles.append(record)
        self._add_domain_event(VehicleAdmittedEvent(
            license_plate=record.identifier,
            category=record.category,
            occupied=self.occupied,
            capacity=self._capacity
        ))

    def find(self, license_plate: str) -> Optional[VehicleRecord]:
        """First parked vehicle with this plate, if any"""
        index = self._index_of(license_plate)
        return None if index is None else self._vehicles[index]

    def release(self, license_plate: str, now: Timestamp) -> ReleaseOutcome:
        """
        Remove a vehicle, charge its fee and add it to the revenue

        Raises VehicleNotFoundError, leaving the lot unchanged, when no
        parked vehicle has this plate.
        """
        index = self._index_of(license_plate)
        if index is None:
            raise VehicleNotFoundError(license_plate)

        record = self._vehicles[index]
        charged = record.fee(now)
        self.total_revenue = self.total_revenue + charged
        del self._vehicles[index]

        self._add_domain_event(VehicleReleasedEvent(
            license_plate=record.identifier,
            category=record.category,
            fee=charged
        ))
        return ReleaseOutcome(record=record, fee=charged)

    def restore(self, records: Iterable[VehicleRecord]) -> int:
        """
        Put previously persisted vehicles back in the lot

        Records keep their stored admission time. No events are raised.
        Records that do not fit are dropped with a warning.
        Returns: number of records restored
        """
        restored = 0
        for record in records:
            if self.is_full:
                self._logger.warning(f"Lot is full, dropping stored vehicle {record.identifier}")
                continue
            self._vehicles.append(record)
            restored += 1
        return restored

    def clear(self) -> None:
        """Forget every parked vehicle"""
        self._vehicles.clear()

    def status(self) -> LotStatus:
        return LotStatus(
            occupied=self.occupied,
            capacity=self._capacity,
            total_revenue=self.total_revenue,
            vehicles=self.vehicles
        )

    def _index_of(self, license_plate: str) -> Optional[int]:
        for index, record in enumerate(self._vehicles):
            if record.identifier == license_plate:
                return index
        return None

    def __len__(self) -> int:
        return len(self._vehicles)

    def __repr__(self) -> str:
        return f"ParkingLot(occupied={self.occupied}, capacity={self._capacity})"
