# File: src/parklot/presentation/console.py
"""
Parking Lot Console

A menu-driven text interface over the ParkingService.

Architecture:
- MVC Pattern: ConsoleView does the reading and printing,
  ParkingConsoleController maps menu choices to service calls
- Admission notices and exit receipts are printed by
  LotEventPrinter, an event handler subscribed to the service's event bus
"""

from typing import Callable, Optional, TextIO
from enum import Enum
import logging
import sys

from ..application.parking_service import ParkingService
from ..application.dtos import LotSnapshotDTO, LoadResultDTO
from ..domain.models import (
    VehicleCategory, ParkingLotError, LotFullError, VehicleNotFoundError
)
from ..domain.events import (
    DomainEvent, EventType, VehicleAdmittedEvent, AdmissionRejectedEvent, VehicleReleasedEvent
)
from ..infrastructure.messaging import EventHandler


RULE = "-" * 33
WIDE_RULE = "-" * 56


class MenuOption(int, Enum):
    EXIT = 0
    PARK_CAR = 1
    PARK_TRUCK = 2
    PARK_MOTORBIKE = 3
    UNPARK = 4
    STATUS = 5

    @property
    def category(self) -> Optional[VehicleCategory]:
        return _PARK_OPTIONS.get(self)


_PARK_OPTIONS = {
    MenuOption.PARK_CAR: VehicleCategory.CAR,
    MenuOption.PARK_TRUCK: VehicleCategory.TRUCK,
    MenuOption.PARK_MOTORBIKE: VehicleCategory.MOTORBIKE,
}

MENU_LINES = (
    "1. Park Car",
    "2. Park Truck",
    "3. Park Motorbike",
    "4. Unpark Vehicle (Pay & Exit)",
    "5. Display Status",
    "0. Exit & Save",
)


# ============================================================================
# VIEW
# ============================================================================

class ConsoleView:
    """Reads from an input function and writes to a text stream"""

    def __init__(self, input_func: Optional[Callable[[str], str]] = None, stream: Optional[TextIO] = None):
        self._input = input_func or input
        self._stream = stream or sys.stdout

    def show(self, text: str = "") -> None:
        print(text, file=self._stream)

    def ask(self, prompt: str) -> Optional[str]:
        """Prompt for a line; None means the input is exhausted"""
        try:
            return self._input(prompt)
        except EOFError:
            return None

    def show_banner(self) -> None:
        self.show("=" * 43)
        self.show("   Parking Lot Management System   ")
        self.show("=" * 43)

    def show_menu(self) -> None:
        for line in MENU_LINES:
            self.show(line)

    def show_load_result(self, result: LoadResultDTO) -> None:
        if not result.readable:
            self.show(f"Error: Could not read saved data from {result.source}. Changes will not be saved.")
        elif result.found:
            self.show("Previous data loaded.")

    def show_admitted(self, event: VehicleAdmittedEvent) -> None:
        self.show(f"{event.category.value} ({event.license_plate}) parked successfully.")

    def show_rejected(self, event: AdmissionRejectedEvent) -> None:
        self.show(f"Parking Lot is Full! {event.license_plate} cannot enter.")

    def show_receipt(self, event: VehicleReleasedEvent) -> None:
        self.show()
        self.show(RULE)
        self.show(f"[EXIT] {event.license_plate} is leaving.")
        self.show(f"Vehicle Type: {event.category.value}")
        self.show(f"Total Fee: {event.fee.format()}")
        self.show(RULE)
        self.show()

    def show_not_found(self, license_plate: str) -> None:
        self.show(f">> ERROR: Vehicle with plate {license_plate} not found!")

    def show_status(self, snapshot: LotSnapshotDTO) -> None:
        self.show()
        self.show(f"=== PARKING LOT STATUS ({snapshot.occupied}/{snapshot.capacity}) ===")
        self.show(f"Total Revenue: {snapshot.formatted_revenue}")
        self.show(WIDE_RULE)
        if snapshot.is_empty:
            self.show("Parking lot is currently empty.")
        else:
            for vehicle in snapshot.vehicles:
                self.show(vehicle.description)
        self.show(WIDE_RULE)
        self.show()

    def show_saved(self, saved: bool) -> None:
        if saved:
            self.show("Data saved successfully.")
        else:
            self.show("Error: Could not open file for saving.")


class LotEventPrinter(EventHandler):
    """Prints lot events as they happen"""

    def __init__(self, view: ConsoleView):
        self.view = view

    def handle(self, event: DomainEvent) -> None:
        if event.event_type == EventType.VEHICLE_ADMITTED:
            self.view.show_admitted(event)
        elif event.event_type == EventType.ADMISSION_REJECTED:
            self.view.show_rejected(event)
        elif event.event_type == EventType.VEHICLE_RELEASED:
            self.view.show_receipt(event)


# ============================================================================
# CONTROLLER
# ============================================================================

class ParkingConsoleController:
    """Runs the menu loop against a ParkingService"""

    def __init__(self, service: ParkingService, view: Optional[ConsoleView] = None):
        self.service = service
        self.view = view or ConsoleView()
        self.logger = logging.getLogger(self.__class__.__name__)
        self.service.event_bus.subscribe_all(LotEventPrinter(self.view))

    def run(self) -> bool:
        """
        Show the menu until the user exits, then shut the service down

        Returns: whether the final save succeeded
        """
        self.view.show_banner()
        self.view.show_load_result(self.service.last_load)

        while True:
            self.view.show_menu()
            raw = self.view.ask("Select an option: ")
            if raw is None:
                break

            choice = self._parse_choice(raw)
            if choice is None:
                continue
            if choice == MenuOption.EXIT:
                break
            if not self.handle(choice):
                break

        saved = self.service.shutdown()
        self.view.show_saved(saved)
        self.view.show("System shutting down. Goodbye!")
        return saved

    def handle(self, choice: MenuOption) -> bool:
        """Carry out one menu choice; False when input ran out"""
        self.logger.debug(f"Menu choice: {choice.name}")
        if choice.category is not None:
            return self.park(choice.category)
        if choice == MenuOption.UNPARK:
            return self.unpark()
        if choice == MenuOption.STATUS:
            self.view.show_status(self.service.status())
        return True

    def park(self, category: VehicleCategory) -> bool:
        plate = self._ask_plate("Enter License Plate: ")
        if plate is None:
            return False
        try:
            self.service.park(category, plate)
        except LotFullError:
            pass  # reported through the rejection event
        except ParkingLotError as e:
            self.view.show(f">> ERROR: {e}")
        return True

    def unpark(self) -> bool:
        plate = self._ask_plate("Enter License Plate to Unpark: ")
        if plate is None:
            return False
        try:
            self.service.unpark(plate)
        except VehicleNotFoundError as e:
            self.view.show_not_found(e.license_plate)
        return True

    def _ask_plate(self, prompt: str) -> Optional[str]:
        raw = self.view.ask(prompt)
        if raw is None:
            return None
        tokens = raw.split()
        return tokens[0] if tokens else ""

    def _parse_choice(self, raw: str) -> Optional[MenuOption]:
        try:
            number = int(raw.strip())
        except ValueError:
            self.view.show("Invalid input. Please enter a number.")
            return None
        try:
            return MenuOption(number)
        except ValueError:
            self.view.show("Invalid selection! Please try again.")
            return None
