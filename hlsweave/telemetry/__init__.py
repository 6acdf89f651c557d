"""Telemetry and observability helpers.

This package emits deterministic generation events for auditing and debugging.
"""

from .logger import RunLogger

__all__ = ["RunLogger"]
