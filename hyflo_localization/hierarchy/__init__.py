"""
Administrative hierarchy module.

This module provides the canonical State -> District -> Locality -> Location
level definitions, the read-only hierarchy index and the cascading selector
built on top of it.
"""

from hyflo_localization.hierarchy.hierarchy_config import (
    HierarchyLevel,
    HierarchyConfiguration,
    HIERARCHY
)
from hyflo_localization.hierarchy.hierarchy_index import (
    HierarchyIndex,
    DistrictAncestry,
    LocalityAncestry,
    LocationAncestry
)
from hyflo_localization.hierarchy.cascade_selector import (
    CascadeSelector,
    CascadeState,
    CascadeSnapshot
)

__all__ = [
    'HierarchyLevel',
    'HierarchyConfiguration',
    'HIERARCHY',
    'HierarchyIndex',
    'DistrictAncestry',
    'LocalityAncestry',
    'LocationAncestry',
    'CascadeSelector',
    'CascadeState',
    'CascadeSnapshot'
]
