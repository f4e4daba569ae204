# File: src/parklot/domain/models.py
"""
Domain Models for the Parking Lot System

This module contains:
1. Domain errors raised by the domain layer
2. Value Objects: Money and LicensePlate
3. Enums: the closed set of vehicle categories and their hourly rates
4. Entities: VehicleRecord, a parked vehicle with its admission time

Fee calculation is a pure function of category, admission time and an
explicit "now", so it can be evaluated repeatedly without side effects.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any, Union, Callable
from datetime import datetime
from decimal import Decimal
from enum import Enum
import time


SECONDS_PER_HOUR = Decimal('3600')
MINIMUM_BILLED_HOURS = Decimal('1')

Timestamp = Union[int, float, Decimal, datetime]


# ============================================================================
# DOMAIN ERRORS
# ============================================================================

class ParkingLotError(Exception):
    """Base exception for parking lot errors"""
    pass


class InvalidCategory(ParkingLotError, ValueError):
    """Raised when a vehicle category is outside the supported set"""
    pass


class InvalidIdentifier(ParkingLotError, ValueError):
    """Raised when a license plate cannot be used as an identifier"""
    pass


class LotFullError(ParkingLotError):
    """Raised when a vehicle is admitted to a full lot"""

    def __init__(self, license_plate: str, capacity: int):
        super().__init__(f"Parking lot is full ({capacity}/{capacity}); {license_plate} cannot enter")
        self.license_plate = license_plate
        self.capacity = capacity


class VehicleNotFoundError(ParkingLotError, LookupError):
    """Raised when no parked vehicle matches a license plate"""

    def __init__(self, license_plate: str):
        super().__init__(f"Vehicle with plate {license_plate} not found")
        self.license_plate = license_plate


class PersistenceError(ParkingLotError):
    """Raised when parked vehicles cannot be written to storage"""
    pass


# ============================================================================
# VALUE OBJECTS
# ============================================================================

@dataclass(frozen=True)
class Money:
    """
    Value Object: Monetary amount with currency
    Provides arithmetic operations with validation
    """
    amount: Decimal
    currency: str = "USD"

    def __post_init__(self):
        """Validate money amount"""
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))

        if self.amount < Decimal('0'):
            raise ValueError("Money amount cannot be negative")

        if len(self.currency) != 3:
            raise ValueError(f"Currency must be 3-letter code: {self.currency}")

    @classmethod
    def zero(cls, currency: str = "USD") -> 'Money':
        return cls(Decimal('0'), currency)

    def __add__(self, other: 'Money') -> 'Money':
        """Add two money amounts (same currency only)"""
        if self.currency != other.currency:
            raise ValueError(f"Cannot add {self.currency} to {other.currency}")
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, multiplier: Decimal) -> 'Money':
        """Multiply money by a decimal"""
        if multiplier < Decimal('0'):
            raise ValueError("Multiplier cannot be negative")
        return Money(self.amount * multiplier, self.currency)

    def format(self) -> str:
        """Format money for display"""
        return f"${self.amount:.2f}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "amount": float(self.amount),
            "currency": self.currency
        }

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True)
class LicensePlate:
    """
    Value Object: License plate used as the vehicle identifier

    The plate is stored as a single whitespace-free token so that it
    survives the whitespace-delimited storage format. Case is preserved
    and matching is exact.
    """
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise InvalidIdentifier(f"License plate must be text, got: {self.value!r}")

        object.__setattr__(self, 'value', self.value.strip())

        if not self.value:
            raise InvalidIdentifier("License plate cannot be empty")

        if any(ch.isspace() for ch in self.value):
            raise InvalidIdentifier(f"License plate cannot contain whitespace: {self.value!r}")

    def __str__(self) -> str:
        return self.value


# ============================================================================
# ENUMS FOR DOMAIN TYPES
# ============================================================================

class VehicleCategory(Enum):
    """
    Enumeration of vehicle categories
    The value is the exact token written to the data file
    """
    CAR = "Car"
    TRUCK = "Truck"
    MOTORBIKE = "Motorbike"

    @property
    def hourly_rate(self) -> Money:
        """Flat hourly parking rate for this category"""
        return Money(_HOURLY_RATES[self])

    @classmethod
    def parse(cls, token: Union[str, 'VehicleCategory']) -> 'VehicleCategory':
        """Convert a case-sensitive category token into a member"""
        if isinstance(token, cls):
            return token
        try:
            return cls(token)
        except ValueError:
            raise InvalidCategory(f"Unknown vehicle category: {token!r}") from None

    def __str__(self) -> str:
        return self.value


_HOURLY_RATES = {
    VehicleCategory.CAR: Decimal('20.0'),
    VehicleCategory.TRUCK: Decimal('50.0'),     # large vehicles pay more
    VehicleCategory.MOTORBIKE: Decimal('10.0'),
}


def to_timestamp(moment: Timestamp) -> Decimal:
    """Normalise a unix timestamp or datetime into Decimal seconds"""
    if isinstance(moment, datetime):
        moment = moment.timestamp()
    if isinstance(moment, Decimal):
        return moment
    return Decimal(str(moment))


# ============================================================================
# ENTITIES
# ============================================================================

@dataclass(frozen=True)
class VehicleRecord:
    """
    Entity: A parked vehicle

    Holds the category, license plate and admission time (unix seconds).
    Records are created on admission or when reloaded from storage and are
    owned by the parking lot until released.
    """
    category: VehicleCategory
    license_plate: LicensePlate
    admission_time: int

    @classmethod
    def create(
        cls,
        category: Union[str, VehicleCategory],
        license_plate: Union[str, LicensePlate],
        admission_time: Optional[int] = None,
        clock: Callable[[], float] = time.time
    ) -> 'VehicleRecord':
        """
        Build a record, stamping it with the current time when no
        admission time (or zero) is supplied
        """
        category = VehicleCategory.parse(category)
        if not isinstance(license_plate, LicensePlate):
            license_plate = LicensePlate(license_plate)
        if not admission_time:
            admission_time = int(clock())
        return cls(category, license_plate, int(admission_time))

    @property
    def identifier(self) -> str:
        return self.license_plate.value

    @property
    def admitted_at(self) -> datetime:
        return datetime.fromtimestamp(self.admission_time)

    def billed_hours(self, now: Timestamp) -> Decimal:
        """Elapsed hours, with any stay under an hour billed as one hour"""
        elapsed = to_timestamp(now) - Decimal(self.admission_time)
        hours = elapsed / SECONDS_PER_HOUR
        return max(hours, MINIMUM_BILLED_HOURS)

    def fee(self, now: Timestamp) -> Money:
        return fee(self, now)

    def describe(self) -> str:
        return describe(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "license_plate": self.identifier,
            "admission_time": self.admission_time
        }

    def __str__(self) -> str:
        return f"{self.category} [{self.license_plate}]"


def fee(record: VehicleRecord, now: Timestamp) -> Money:
    """Parking fee owed by ``record`` if it leaves at ``now``"""
    return record.category.hourly_rate * record.billed_hours(now)


def describe(record: VehicleRecord) -> str:
    """One status line: category, plate and a readable admission time"""
    entered = record.admitted_at.ctime()
    return f"{record.category.value:<15}{record.identifier:<15}Entry: {entered}"
