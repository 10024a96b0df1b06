"""Domain layer for the Modbus RTU poller.

Pure protocol types, interfaces and helpers. Nothing in this package
performs I/O.
"""
