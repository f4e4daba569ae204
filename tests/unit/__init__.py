"""Unit tests for the Parking Lot System"""
