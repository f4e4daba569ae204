# File: src/parklot/infrastructure/repositories.py
"""
Repository Pattern Implementation for the Parking Lot System

Repositories store the parked vehicles between runs. The lot is loaded
once when the service starts and saved once when it shuts down, so the
interface is a whole-collection load/save rather than per-entity CRUD.

Storage format (plain text, one vehicle per line, no header):

    <Category> <LicensePlate> <AdmissionUnixTimestamp>

Storage Implementations:
- FlatFileVehicleRepository - the data file used by the application
- InMemoryVehicleRepository - for testing
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, List, Iterable
from datetime import datetime
from pathlib import Path
import logging

from ..domain.models import (
    VehicleRecord, VehicleCategory, LicensePlate,
    ParkingLotError, PersistenceError
)


FIELD_COUNT = 3


# ============================================================================
# RECORD CODEC
# ============================================================================

def encode_record(record: VehicleRecord) -> str:
    """Render a record as one storage line (without the newline)"""
    return f"{record.category.value} {record.identifier} {record.admission_time}"


def decode_record(line: str) -> Optional[VehicleRecord]:
    """
    Parse one storage line

    Returns None for lines that do not have exactly three fields, whose
    category is unknown or whose timestamp is not a non-negative integer
    that the platform can turn into a date. The stored timestamp is kept
    as-is, zero included.
    """
    fields = line.split()
    if len(fields) != FIELD_COUNT:
        return None

    category_token, plate_token, timestamp_token = fields
    if not (timestamp_token.isascii() and timestamp_token.isdigit()):
        return None

    try:
        category = VehicleCategory.parse(category_token)
        license_plate = LicensePlate(plate_token)
    except ParkingLotError:
        return None

    try:
        admission_time = int(timestamp_token)
        datetime.fromtimestamp(admission_time)
    except (OverflowError, OSError, ValueError):
        return None

    return VehicleRecord(category, license_plate, admission_time)


# ============================================================================
# REPOSITORY INTERFACE
# ============================================================================

@dataclass
class LoadedVehicles:
    """Result of reading the stored vehicles"""
    records: List[VehicleRecord] = field(default_factory=list)
    skipped: int = 0
    found: bool = True
    readable: bool = True


class VehicleRepository(ABC):
    """Base repository interface"""

    @property
    @abstractmethod
    def source(self) -> str:
        """Human-readable location of the stored data"""
        pass

    @abstractmethod
    def load(self) -> LoadedVehicles:
        """Read every stored vehicle, skipping unusable lines"""
        pass

    @abstractmethod
    def save(self, records: Iterable[VehicleRecord]) -> int:
        """
        Replace the stored vehicles with ``records``

        Returns: number of records written
        Raises: PersistenceError if the storage cannot be written
        """
        pass

    def _decode_lines(self, lines: Iterable[str]) -> LoadedVehicles:
        result = LoadedVehicles()
        for number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            record = decode_record(line)
            if record is None:
                result.skipped += 1
                self._logger.warning(f"Skipping malformed line {number} in {self.source}: {line.rstrip()!r}")
                continue
            result.records.append(record)
        return result


# ============================================================================
# FLAT FILE REPOSITORY
# ============================================================================

class FlatFileVehicleRepository(VehicleRepository):
    """Repository keeping vehicles in a whitespace-delimited text file"""

    DEFAULT_PATH = "parking_data.txt"

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path or self.DEFAULT_PATH)
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def source(self) -> str:
        return str(self.path)

    def load(self) -> LoadedVehicles:
        try:
            with open(self.path, 'r', encoding='utf-8', errors='replace') as data_file:
                result = self._decode_lines(data_file)
        except FileNotFoundError:
            self._logger.info(f"No data file at {self.path}, starting empty")
            return LoadedVehicles(found=False)
        except OSError as e:
            self._logger.error(f"Could not read data file {self.path}: {e}")
            return LoadedVehicles(readable=False)

        self._logger.debug(f"Read {len(result.records)} vehicles from {self.path}")
        return result

    def save(self, records: Iterable[VehicleRecord]) -> int:
        records = list(records)
        try:
            with open(self.path, 'w', encoding='utf-8', newline='\n') as data_file:
                for record in records:
                    data_file.write(encode_record(record) + '\n')
        except OSError as e:
            raise PersistenceError(f"Could not open {self.path} for saving: {e}") from e

        self._logger.debug(f"Wrote {len(records)} vehicles to {self.path}")
        return len(records)


# ============================================================================
# IN-MEMORY REPOSITORY (For Testing)
# ============================================================================

class InMemoryVehicleRepository(VehicleRepository):
    """In-memory repository for testing; keeps the encoded lines"""

    def __init__(self, lines: Optional[List[str]] = None):
        self.lines: Optional[List[str]] = list(lines) if lines is not None else None
        self.save_count = 0
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def source(self) -> str:
        return "memory"

    def load(self) -> LoadedVehicles:
        if self.lines is None:
            return LoadedVehicles(found=False)
        return self._decode_lines(self.lines)

    def save(self, records: Iterable[VehicleRecord]) -> int:
        self.lines = [encode_record(record) for record in records]
        self.save_count += 1
        return len(self.lines)

    def clear(self):
        """Forget all stored data"""
        self.lines = None
