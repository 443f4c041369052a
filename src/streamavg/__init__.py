# src/streamavg/__init__.py
PACKAGE_NAME = "streamavg"
__version__ = "0.1.0"
