"""
Shared Kernel

This module contains base classes and utilities shared across all apps:
domain building blocks, the unit of work, the message bus and the DRF
glue (exception handler, pagination, health check).
"""
