# File: src/parklot/infrastructure/__init__.py
