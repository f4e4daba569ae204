"""
Integration Tests Package for the Parking Lot System

Integration tests exercise the service, storage, event bus and console
together:
1. End-to-end parking scenarios
2. Persistence across service restarts
3. Console menu flows
"""

import shutil
import tempfile
from pathlib import Path


T0 = 1_700_000_000


class FakeClock:
    """Controllable clock returning unix seconds"""

    def __init__(self, now=T0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds
        return self.now


class StoredDataGenerator:
    """Generate stored-vehicle lines for integration tests"""

    @staticmethod
    def stored_lines(count, category="Car", start=T0):
        return [f"{category} {category.upper()}-{number} {start + number}" for number in range(count)]


class IntegrationTestFixture:
    """Base fixture for integration tests"""

    def __init__(self):
        self.temp_dirs = []

    def create_temp_directory(self):
        """Create a temporary directory"""
        temp_dir = tempfile.mkdtemp()
        self.temp_dirs.append(temp_dir)
        return Path(temp_dir)

    def cleanup(self):
        """Remove temp directories"""
        for temp_dir in self.temp_dirs:
            shutil.rmtree(temp_dir, ignore_errors=True)
        self.temp_dirs.clear()
