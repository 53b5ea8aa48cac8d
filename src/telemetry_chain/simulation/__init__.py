"""
Simulation Module
=================

Synthetic telemetry source for demos and tests.
"""

from telemetry_chain.simulation.generator import SensorDataGenerator

__all__ = ["SensorDataGenerator"]
