# File: src/parklot/main.py
"""
Main application entry point for the Parking Lot System
Wires configuration, logging, storage, the service and the console
"""

from typing import List, Optional
import argparse
import logging
import os
import sys

from .infrastructure.config import AppSettings, ConfigurationError, load_settings
from .infrastructure.repositories import FlatFileVehicleRepository
from .infrastructure.messaging import EventBus
from .application.parking_service import ParkingService
from .presentation.console import ConsoleView, ParkingConsoleController


def setup_logging(settings: AppSettings) -> logging.Logger:
    """Setup application logging configuration"""
    if not os.path.exists(settings.log_dir):
        os.makedirs(settings.log_dir)

    handlers: List[logging.Handler] = [logging.FileHandler(settings.log_file, encoding='utf-8')]
    if settings.log_to_console:
        handlers.append(logging.StreamHandler(sys.stderr))

    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )
    return logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="parklot",
        description="Parking lot management console"
    )
    parser.add_argument("--config", help="YAML settings file")
    parser.add_argument("--data-file", dest="data_file", help="file holding the parked vehicles")
    parser.add_argument("--log-dir", dest="log_dir", help="directory for parklot.log")
    parser.add_argument("--log-level", dest="log_level", help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument(
        "--verbose", dest="log_to_console", action="store_const", const=True,
        help="also write log records to stderr"
    )
    return parser


class ParkingApplication:
    """Main application controller that sets up all components"""

    def __init__(self, settings: AppSettings, view: Optional[ConsoleView] = None):
        self.settings = settings
        self.logger = logging.getLogger(self.__class__.__name__)
        self.logger.info("Starting Parking Lot System...")

        self.repository = FlatFileVehicleRepository(settings.data_file)
        self.event_bus = EventBus()
        self.service = ParkingService(repository=self.repository, event_bus=self.event_bus)
        self.controller = ParkingConsoleController(self.service, view)

    def run(self) -> bool:
        try:
            return self.controller.run()
        except KeyboardInterrupt:
            self.logger.info("Interrupted, saving before exit")
            saved = self.service.shutdown()
            self.controller.view.show_saved(saved)
            return saved


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)
    overrides = {
        "data_file": args.data_file,
        "log_dir": args.log_dir,
        "log_level": args.log_level,
        "log_to_console": args.log_to_console,
    }
    try:
        settings = load_settings(args.config, overrides)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    setup_logging(settings)
    app = ParkingApplication(settings)
    return 0 if app.run() else 1


if __name__ == "__main__":
    sys.exit(main())
