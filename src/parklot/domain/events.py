# File: src/parklot/domain/events.py
"""
Domain Events for the Parking Lot System

Events are raised by the ParkingLot aggregate for the occurrences the
outside world must be told about: a vehicle admitted, a vehicle turned
away because the lot is full, and a vehicle released with its receipt.
The application layer publishes them on the event bus.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
from datetime import datetime
from enum import Enum
import uuid

from .models import VehicleCategory, Money


class EventType(str, Enum):
    """Domain event types"""
    VEHICLE_ADMITTED = "vehicle_admitted"
    ADMISSION_REJECTED = "admission_rejected"
    VEHICLE_RELEASED = "vehicle_released"


class DomainEvent(ABC):
    """
    Base class for all domain events
    Events represent something that happened in the domain
    """
    event_type: EventType

    def __init__(self, timestamp: Optional[datetime] = None):
        self.event_id = str(uuid.uuid4())
        self.timestamp = timestamp or datetime.now()

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization"""
        pass

    def __str__(self) -> str:
        return f"{self.__class__.__name__} at {self.timestamp}"


class VehicleAdmittedEvent(DomainEvent):
    """Event raised when a vehicle is parked"""
    event_type = EventType.VEHICLE_ADMITTED

    def __init__(self, license_plate: str, category: VehicleCategory, occupied: int, capacity: int):
        super().__init__()
        self.license_plate = license_plate
        self.category = category
        self.occupied = occupied
        self.capacity = capacity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_id": self.event_id,
            "event_type": self.event_type.value,
            "timestamp": self.timestamp.isoformat(),
            "license_plate": self.license_plate,
            "category": self.category.value,
            "occupied": self.occupied,
            "capacity": self.capacity
        }


class AdmissionRejectedEvent(DomainEvent):
    """Event raised when a vehicle is turned away from a full lot"""
    event_type = EventType.ADMISSION_REJECTED

    def __init__(self, license_plate: str, category: VehicleCategory, capacity: int):
        super().__init__()
        self.license_plate = license_plate
        self.category = category
        self.capacity = capacity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_id": self.event_id,
            "event_type": self.event_type.value,
            "timestamp": self.timestamp.isoformat(),
            "license_plate": self.license_plate,
            "category": self.category.value,
            "capacity": self.capacity
        }


class VehicleReleasedEvent(DomainEvent):
    """Event raised when a vehicle leaves and pays"""
    event_type = EventType.VEHICLE_RELEASED

    def __init__(self, license_plate: str, category: VehicleCategory, fee: Money):
        super().__init__()
        self.license_plate = license_plate
        self.category = category
        self.fee = fee

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_id": self.event_id,
            "event_type": self.event_type.value,
            "timestamp": self.timestamp.isoformat(),
            "license_plate": self.license_plate,
            "category": self.category.value,
            "fee": self.fee.to_dict()
        }
