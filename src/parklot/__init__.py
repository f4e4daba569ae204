# File: src/parklot/__init__.py
"""
Parking Lot System

A fixed-capacity parking lot that charges vehicles by the hour and keeps
the parked vehicles in a flat text file between runs.
"""

__version__ = "1.0.0"
