# File: src/parklot/application/__init__.py
