# File: src/parklot/domain/__init__.py
