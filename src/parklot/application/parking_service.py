# File: src/parklot/application/parking_service.py
"""
Parking Lot Application Service

This module implements the application service layer. It is the boundary
the console talks to and orchestrates one ParkingLot aggregate:

1. Load the stored vehicles when the service is created
2. Park and unpark vehicles, publishing the resulting domain events
3. Report the lot status
4. Save the parked vehicles when the service shuts down

"Now" is always either passed in explicitly or taken from the injected
clock, so fees can be computed without touching the wall clock in tests.
"""

from typing import Optional, Callable, Union
from decimal import Decimal
import logging
import time

from ..domain.models import (
    VehicleRecord, VehicleCategory, Money, Timestamp,
    LotFullError, VehicleNotFoundError, PersistenceError
)
from ..domain.aggregates import ParkingLot
from ..infrastructure.repositories import VehicleRepository
from ..infrastructure.messaging import EventBus
from .dtos import VehicleViewDTO, ReceiptDTO, LotSnapshotDTO, LoadResultDTO


class ParkingService:
    """
    Main application service for the parking lot

    Creating the service loads the stored vehicles; shutdown() saves them
    and empties the lot. The service can also be used as a context
    manager, which shuts it down on exit.
    """

    def __init__(
        self,
        repository: VehicleRepository,
        event_bus: Optional[EventBus] = None,
        clock: Callable[[], float] = time.time
    ):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.repository = repository
        self.event_bus = event_bus or EventBus()
        self._clock = clock
        self.lot = ParkingLot()
        self._shutdown_result: Optional[bool] = None

        self.last_load = self.load_data()
        self.logger.info(
            f"ParkingService initialized ({self.lot.occupied}/{self.lot.capacity} occupied)"
        )

    # ------------------------------------------------------------------
    # Use cases
    # ------------------------------------------------------------------

    def park(self, category: Union[str, VehicleCategory], license_plate: str) -> VehicleViewDTO:
        """
        Park a vehicle, stamped with the current time

        Raises: LotFullError when the lot has no free space
        """
        record = VehicleRecord.create(category, license_plate, clock=self._clock)
        try:
            self.lot.admit(record)
        except LotFullError:
            self.logger.warning(f"Lot full, turned away {record}")
            raise
        finally:
            self._publish_events()

        self.logger.info(f"Parked {record} ({self.lot.occupied}/{self.lot.capacity})")
        return VehicleViewDTO.from_record(record)

    def unpark(self, license_plate: str, now: Optional[Timestamp] = None) -> ReceiptDTO:
        """
        Release a vehicle and charge it

        Raises: VehicleNotFoundError when no parked vehicle has the plate
        """
        moment = self._now() if now is None else now
        try:
            outcome = self.lot.release(license_plate.strip(), moment)
        except VehicleNotFoundError:
            self.logger.warning(f"Unpark requested for unknown plate {license_plate}")
            raise

        self._publish_events()
        self.logger.info(f"Released {outcome.record}, fee {outcome.fee}")
        return ReceiptDTO.from_outcome(outcome)

    def quote(self, license_plate: str, now: Optional[Timestamp] = None) -> Money:
        """Fee the vehicle would pay if it left now; nothing changes"""
        record = self.lot.find(license_plate.strip())
        if record is None:
            raise VehicleNotFoundError(license_plate)
        return record.fee(self._now() if now is None else now)

    def status(self) -> LotSnapshotDTO:
        return LotSnapshotDTO.from_status(self.lot.status())

    @property
    def total_revenue(self) -> Decimal:
        return self.lot.total_revenue.amount

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load_data(self) -> LoadResultDTO:
        """
        Add the stored vehicles to the lot, keeping their admission times

        A missing data file is not an error. Unusable lines are skipped.
        A data file that exists but cannot be read leaves the lot empty and
        blocks saving, so the stored vehicles are not overwritten.
        """
        loaded = self.repository.load()
        restored = self.lot.restore(loaded.records)
        skipped = loaded.skipped + (len(loaded.records) - restored)

        if skipped:
            self.logger.warning(f"Skipped {skipped} stored entries from {self.repository.source}")
        if not loaded.readable:
            self.logger.error(f"Stored vehicles in {self.repository.source} could not be read; saving is disabled")
        elif loaded.found:
            self.logger.info(f"Loaded {restored} vehicles from {self.repository.source}")

        return LoadResultDTO(
            source=self.repository.source,
            found=loaded.found,
            loaded=restored,
            skipped=skipped,
            readable=loaded.readable
        )

    def save_data(self) -> int:
        """
        Write the parked vehicles to storage in admission order

        Raises: PersistenceError, also when the stored data could not be
        read at startup; the lot itself is left untouched
        """
        if not self.last_load.readable:
            self.logger.error(f"Not saving over unread data in {self.repository.source}")
            raise PersistenceError(f"Stored data in {self.repository.source} was never read; not overwriting it")

        try:
            written = self.repository.save(self.lot.vehicles)
        except PersistenceError as e:
            self.logger.error(f"Saving failed: {e}")
            raise

        self.logger.info(f"Saved {written} vehicles to {self.repository.source}")
        return written

    def shutdown(self) -> bool:
        """
        Save the lot and release every in-memory record

        Returns False when saving failed; the failure is logged, not
        raised. Calling shutdown again does nothing.
        """
        if self._shutdown_result is not None:
            return self._shutdown_result

        try:
            self.save_data()
            self._shutdown_result = True
        except PersistenceError:
            self._shutdown_result = False

        self.lot.clear()
        self.logger.info("ParkingService shut down")
        return self._shutdown_result

    @property
    def is_shut_down(self) -> bool:
        return self._shutdown_result is not None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _now(self) -> int:
        return int(self._clock())

    def _publish_events(self) -> None:
        self.event_bus.publish_all(self.lot.clear_events())

    def __enter__(self) -> 'ParkingService':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()
        return False
