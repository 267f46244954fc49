"""
HyFlo localization core.

This package resolves multilingual labels for geographic records, indexes the
State -> District -> Locality hierarchy for cascading selection, and validates
and measures the waypoint routes of linear infrastructure.
"""

__version__ = "1.0.0"
__author__ = "HyFlo Team"
