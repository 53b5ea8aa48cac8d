"""
Segments Module
===============

Aggregate statistics and streaming segment assembly.

The processor is imported from ``telemetry_chain.segments.processor``; this
package only re-exports the aggregator, which the chain builder depends on.
"""

from telemetry_chain.segments.aggregator import aggregate_field, aggregate_metrics

__all__ = ["aggregate_field", "aggregate_metrics"]
