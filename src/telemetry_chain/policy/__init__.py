"""
Policy Module
=============

Bounds checks over aggregated metrics.
"""

from telemetry_chain.policy.checker import check_metrics_against_policy, evaluate_segments

__all__ = ["check_metrics_against_policy", "evaluate_segments"]
