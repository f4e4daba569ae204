"""Tests for the Parking Lot System"""
