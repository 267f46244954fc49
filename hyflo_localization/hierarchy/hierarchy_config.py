"""
Hierarchy configuration for the localization core.

This module defines the administrative levels and the canonical
State -> District -> Locality -> Location hierarchy. Each level names the
foreign key a record holds towards its parent level.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..exceptions import HierarchyValidationError


@dataclass(frozen=True)
class HierarchyLevel:
    """
    Represents a single level in the administrative hierarchy.

    Attributes:
        name: Level identifier (e.g., 'state', 'district', 'locality', 'location')
        parent_level: Name of the parent level (None for the top level)
        parent_key: Attribute holding the parent id on records of this level
        parent_required: Whether a record of this level must have a parent
    """
    name: str
    parent_level: Optional[str] = None
    parent_key: Optional[str] = None
    parent_required: bool = True


@dataclass(frozen=True)
class HierarchyConfiguration:
    """
    Ordered set of hierarchy levels, top level first.

    Attributes:
        levels: All levels in hierarchical order
    """
    levels: Tuple[HierarchyLevel, ...] = field(default_factory=tuple)

    def get_level(self, name: str) -> Optional[HierarchyLevel]:
        """
        Get hierarchy level by name.

        Args:
            name: Name of the level to retrieve

        Returns:
            HierarchyLevel object if found, None otherwise
        """
        for level in self.levels:
            if level.name == name:
                return level
        return None

    def get_parent_level(self, level_name: str) -> Optional[HierarchyLevel]:
        """
        Get the parent level of a given level.

        Args:
            level_name: Name of the level whose parent to find

        Returns:
            Parent HierarchyLevel object if found, None otherwise
        """
        level = self.get_level(level_name)
        if level is None or level.parent_level is None:
            return None
        return self.get_level(level.parent_level)

    def get_child_level(self, level_name: str) -> Optional[HierarchyLevel]:
        """
        Get the child level of a given level.

        Args:
            level_name: Name of the level whose child to find

        Returns:
            Child HierarchyLevel object if found, None otherwise
        """
        for level in self.levels:
            if level.parent_level == level_name:
                return level
        return None

    def get_ancestor_names(self, level_name: str) -> List[str]:
        """Names of every ancestor of a level, nearest first."""
        ancestors = []
        parent = self.get_parent_level(level_name)
        while parent is not None and parent.name not in ancestors:
            ancestors.append(parent.name)
            parent = self.get_parent_level(parent.name)
        return ancestors

    def level_names(self) -> List[str]:
        return [level.name for level in self.levels]

    def validate(self) -> Tuple[bool, List[str]]:
        """
        Validate the hierarchy configuration.

        Returns:
            Tuple of (is_valid, list_of_issues)
        """
        issues = []

        names = self.level_names()
        duplicates = sorted({name for name in names if names.count(name) > 1})
        for name in duplicates:
            issues.append(f"Level '{name}' is defined more than once")

        for level in self.levels:
            if level.parent_level is not None:
                if self.get_level(level.parent_level) is None:
                    issues.append(
                        f"Level '{level.name}' references non-existent parent '{level.parent_level}'"
                    )
                if level.parent_key is None:
                    issues.append(f"Level '{level.name}' has a parent but no parent key")

        # Check for circular dependencies
        visited = set()
        for level in self.levels:
            current = level
            path = []
            while current is not None:
                if current.name in visited:
                    break
                if current.name in path:
                    issues.append(f"Circular dependency detected in hierarchy: {' -> '.join(path)}")
                    break
                path.append(current.name)
                current = self.get_parent_level(current.name)
            visited.update(path)

        return len(issues) == 0, issues

    def ensure_valid(self) -> 'HierarchyConfiguration':
        """Raise HierarchyValidationError when the configuration is inconsistent."""
        is_valid, issues = self.validate()
        if not is_valid:
            raise HierarchyValidationError(
                f"Invalid hierarchy configuration: {len(issues)} issue(s)",
                issues=issues
            )
        return self


HIERARCHY = HierarchyConfiguration(levels=(
    HierarchyLevel(name='state'),
    HierarchyLevel(name='district', parent_level='state', parent_key='state_id'),
    HierarchyLevel(name='locality', parent_level='district', parent_key='district_id'),
    HierarchyLevel(name='location', parent_level='locality', parent_key='locality_id',
                   parent_required=False),
)).ensure_valid()
