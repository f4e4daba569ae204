# File: src/parklot/presentation/__init__.py
