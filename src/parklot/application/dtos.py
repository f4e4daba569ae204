# File: src/parklot/application/dtos.py
"""
Data Transfer Objects (DTOs) for the Parking Lot System

DTOs carry results out of the application layer to the console:
1. VehicleViewDTO - one parked vehicle
2. ReceiptDTO - the result of a successful release
3. LotSnapshotDTO - occupancy, capacity, revenue and the vehicle list
4. LoadResultDTO - what happened when stored vehicles were loaded

DTO Principles:
- Immutable (frozen models)
- No business logic, only data
- Built from domain objects through from_* constructors
"""

from typing import Dict, List, Any
from decimal import Decimal

from pydantic import BaseModel, Field, ConfigDict

from ..domain.models import VehicleRecord, Money
from ..domain.aggregates import LotStatus, ReleaseOutcome


# ============================================================================
# BASE DTO CLASSES
# ============================================================================

class BaseDTO(BaseModel):
    """Base DTO with common functionality"""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
    )

    def to_dict(self, exclude_none: bool = False, **kwargs) -> Dict[str, Any]:
        """Convert DTO to dictionary"""
        return self.model_dump(exclude_none=exclude_none, **kwargs)


def format_amount(amount: Decimal) -> str:
    return Money(amount).format()


# ============================================================================
# OUTPUT DTOs
# ============================================================================

class VehicleViewDTO(BaseDTO):
    """DTO for a parked vehicle"""
    category: str
    license_plate: str
    admission_time: int = Field(ge=0, description="Unix seconds")
    description: str

    @classmethod
    def from_record(cls, record: VehicleRecord) -> 'VehicleViewDTO':
        return cls(
            category=record.category.value,
            license_plate=record.identifier,
            admission_time=record.admission_time,
            description=record.describe()
        )


class ReceiptDTO(BaseDTO):
    """DTO for the receipt handed out on exit"""
    license_plate: str
    category: str
    fee: Decimal = Field(ge=0)

    @property
    def formatted_fee(self) -> str:
        return format_amount(self.fee)

    @classmethod
    def from_outcome(cls, outcome: ReleaseOutcome) -> 'ReceiptDTO':
        return cls(
            license_plate=outcome.record.identifier,
            category=outcome.record.category.value,
            fee=outcome.fee.amount
        )


class LotSnapshotDTO(BaseDTO):
    """DTO for parking lot status"""
    occupied: int = Field(ge=0)
    capacity: int = Field(ge=0)
    total_revenue: Decimal = Field(ge=0)
    vehicles: List[VehicleViewDTO] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.occupied == 0

    @property
    def available(self) -> int:
        return self.capacity - self.occupied

    @property
    def formatted_revenue(self) -> str:
        return format_amount(self.total_revenue)

    @classmethod
    def from_status(cls, status: LotStatus) -> 'LotSnapshotDTO':
        return cls(
            occupied=status.occupied,
            capacity=status.capacity,
            total_revenue=status.total_revenue.amount,
            vehicles=[VehicleViewDTO.from_record(record) for record in status.vehicles]
        )


class LoadResultDTO(BaseDTO):
    """DTO describing a load of stored vehicles"""
    source: str
    found: bool = Field(description="Whether the data file existed")
    loaded: int = Field(default=0, ge=0)
    skipped: int = Field(default=0, ge=0, description="Malformed or unusable lines")
    readable: bool = Field(default=True, description="False when the data file exists but could not be read")
