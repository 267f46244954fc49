"""
Read-only index over the administrative hierarchy.

This module provides the HierarchyIndex class, built once from flat lists of
states, districts and localities (and optionally countries). It answers
parent -> children queries for cascading selection and reconstructs the full
ancestry of a locality, district or location. Dangling references are
reported as NotFoundError, never as a partially filled chain.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from ..exceptions import NotFoundError, create_not_found_error
from ..models import Country, State, District, Locality, Location
from ..utils.data_utils import safe_int_conversion, group_by
from .hierarchy_config import HierarchyConfiguration, HIERARCHY


@dataclass(frozen=True)
class DistrictAncestry:
    """A district together with its state."""
    district: District
    state: State


@dataclass(frozen=True)
class LocalityAncestry:
    """A locality together with its district and state."""
    locality: Locality
    district: District
    state: State

    def ids(self) -> Tuple[Any, Any, Any]:
        """Return (state_id, district_id, locality_id)."""
        return self.state.id, self.district.id, self.locality.id


@dataclass(frozen=True)
class LocationAncestry:
    """A location together with its locality, district and state."""
    location: Location
    locality: Locality
    district: District
    state: State


def normalize_id(value: Any) -> Optional[int]:
    """Normalize an identifier coming from a record or a UI event."""
    return safe_int_conversion(value)


class HierarchyIndex:
    """
    Immutable in-memory index over State -> District -> Locality records.

    Lookups by id and children-of-parent queries are dictionary lookups on
    maps precomputed at construction. The index is never updated in place:
    load a fresh snapshot and build a new index instead.
    """

    def __init__(
        self,
        states: Iterable[State] = (),
        districts: Iterable[District] = (),
        localities: Iterable[Locality] = (),
        countries: Iterable[Country] = (),
        hierarchy: HierarchyConfiguration = HIERARCHY,
        logger: Optional[logging.Logger] = None
    ):
        """
        Build the index from one consistent snapshot.

        Args:
            states: State records
            districts: District records (each with state_id)
            localities: Locality records (each with district_id)
            countries: Optional country records, independent of the State subtree
            hierarchy: Level definitions giving the parent key of each level
            logger: Optional logger for data quality warnings
        """
        self.logger = logger or logging.getLogger(__name__)
        self.hierarchy = hierarchy

        issues: List[str] = []
        records = {
            'country': tuple(countries),
            'state': tuple(states),
            'district': tuple(districts),
            'locality': tuple(localities),
        }

        self._records: Mapping[str, Tuple[Any, ...]] = MappingProxyType(records)
        self._by_id: Mapping[str, Mapping[int, Any]] = MappingProxyType({
            level: self._build_id_map(level, items, issues)
            for level, items in records.items()
        })
        self._children: Mapping[str, Mapping[int, Tuple[Any, ...]]] = MappingProxyType({
            'state': self._build_children_map('district', issues),
            'district': self._build_children_map('locality', issues),
        })
        self._issues: Tuple[str, ...] = tuple(issues)

        for issue in self._issues:
            self.logger.warning(f"DATA QUALITY: {issue}")
        self.logger.debug(f"Hierarchy index built: {self.stats()}")

    @classmethod
    def from_snapshot(cls, snapshot: Any, logger: Optional[logging.Logger] = None) -> 'HierarchyIndex':
        """
        Build an index from any object exposing states, districts, localities
        and countries attributes (e.g. a loaded HierarchySnapshot).
        """
        return cls(
            states=snapshot.states,
            districts=snapshot.districts,
            localities=snapshot.localities,
            countries=getattr(snapshot, 'countries', ()),
            logger=logger
        )

    def _build_id_map(self, level: str, items: Tuple[Any, ...],
                      issues: List[str]) -> Mapping[int, Any]:
        """Map id -> record, keeping the first record for duplicated ids."""
        by_id: Dict[int, Any] = {}
        for position, item in enumerate(items, start=1):
            key = normalize_id(item.id)
            if key is None:
                issues.append(f"{level.capitalize()} at position {position} has no id")
                continue
            if key in by_id:
                issues.append(f"Duplicate {level} id {key}; keeping the first occurrence")
                continue
            by_id[key] = item
        return MappingProxyType(by_id)

    def _build_children_map(self, child_level: str,
                            issues: List[str]) -> Mapping[int, Tuple[Any, ...]]:
        """Group child records by the id of their parent, preserving input order."""
        level = self.hierarchy.get_level(child_level)
        parent_level = level.parent_level
        known_parents = self._by_id[parent_level]
        known_children = self._by_id[child_level]

        def parent_of(item):
            return normalize_id(getattr(item, level.parent_key, None))

        children = [
            item for item in self._records[child_level]
            if known_children.get(normalize_id(item.id)) is item
        ]
        for item in children:
            parent_id = parent_of(item)
            if parent_id is None:
                if level.parent_required:
                    issues.append(f"{child_level.capitalize()} {item.id} has no {parent_level}")
            elif parent_id not in known_parents:
                issues.append(
                    f"{child_level.capitalize()} {item.id} references missing "
                    f"{parent_level} {parent_id}"
                )

        grouped = group_by(children, parent_of)
        return MappingProxyType({key: tuple(group) for key, group in grouped.items()})

    # ------------------------------------------------------------------
    # Record access

    @property
    def countries(self) -> Tuple[Country, ...]:
        return self._records['country']

    @property
    def states(self) -> Tuple[State, ...]:
        return self._records['state']

    @property
    def districts(self) -> Tuple[District, ...]:
        return self._records['district']

    @property
    def localities(self) -> Tuple[Locality, ...]:
        return self._records['locality']

    def _find(self, level: str, entity_id: Any) -> Optional[Any]:
        key = normalize_id(entity_id)
        if key is None:
            return None
        return self._by_id[level].get(key)

    def _get(self, level: str, entity_id: Any, referenced_by: Optional[str] = None) -> Any:
        record = self._find(level, entity_id)
        if record is None:
            raise create_not_found_error(level, entity_id, referenced_by)
        return record

    def find_country(self, country_id: Any) -> Optional[Country]:
        return self._find('country', country_id)

    def find_state(self, state_id: Any) -> Optional[State]:
        return self._find('state', state_id)

    def find_district(self, district_id: Any) -> Optional[District]:
        return self._find('district', district_id)

    def find_locality(self, locality_id: Any) -> Optional[Locality]:
        return self._find('locality', locality_id)

    def get_country(self, country_id: Any) -> Country:
        """Return the country or raise NotFoundError."""
        return self._get('country', country_id)

    def get_state(self, state_id: Any) -> State:
        """Return the state or raise NotFoundError."""
        return self._get('state', state_id)

    def get_district(self, district_id: Any) -> District:
        """Return the district or raise NotFoundError."""
        return self._get('district', district_id)

    def get_locality(self, locality_id: Any) -> Locality:
        """Return the locality or raise NotFoundError."""
        return self._get('locality', locality_id)

    # ------------------------------------------------------------------
    # Cascade queries

    def districts_of_state(self, state_id: Any) -> List[District]:
        """
        All districts whose state_id matches, in input order.

        Districts without an id, and later duplicates of an id, are not
        indexed and never appear here; validate() lists them.

        Args:
            state_id: Identifier of the parent state

        Returns:
            New list of districts (empty for unknown or childless states)
        """
        key = normalize_id(state_id)
        return list(self._children['state'].get(key, ()))

    def localities_of_district(self, district_id: Any) -> List[Locality]:
        """
        All localities whose district_id matches, in input order.

        Localities without an id, and later duplicates of an id, are not
        indexed and never appear here; validate() lists them.

        Args:
            district_id: Identifier of the parent district

        Returns:
            New list of localities (empty for unknown or childless districts)
        """
        key = normalize_id(district_id)
        return list(self._children['district'].get(key, ()))

    # ------------------------------------------------------------------
    # Ancestry

    def ancestry_of_district(self, district_id: Any) -> DistrictAncestry:
        """
        Resolve a district and its state.

        Raises:
            NotFoundError: If the district or its state is missing
        """
        district = self.get_district(district_id)
        state = self._get('state', district.state_id, referenced_by=f"district {district.id}")
        return DistrictAncestry(district=district, state=state)

    def ancestry_of_locality(self, locality_id: Any) -> LocalityAncestry:
        """
        Resolve the full State -> District -> Locality chain of a locality.

        Args:
            locality_id: Identifier of the locality

        Returns:
            LocalityAncestry with every link resolved

        Raises:
            NotFoundError: If the locality, its district or that district's
                state cannot be found in this index
        """
        locality = self.get_locality(locality_id)
        district = self._get(
            'district', locality.district_id, referenced_by=f"locality {locality.id}"
        )
        state = self._get('state', district.state_id, referenced_by=f"district {district.id}")
        return LocalityAncestry(locality=locality, district=district, state=state)

    def ancestry_of_location(self, location: Location) -> LocationAncestry:
        """
        Resolve the chain above a location through its locality.

        Raises:
            NotFoundError: If the location has no locality or any link is missing
        """
        if normalize_id(location.locality_id) is None:
            raise NotFoundError(
                f"Location {location.id} is not attached to a locality",
                entity_type='locality',
                entity_id=None,
                referenced_by=f"location {location.id}"
            )
        chain = self.ancestry_of_locality(location.locality_id)
        return LocationAncestry(
            location=location,
            locality=chain.locality,
            district=chain.district,
            state=chain.state
        )

    def is_consistent(self, state_id: Any, district_id: Any, locality_id: Any) -> bool:
        """
        Check that a locality, district and state selection form one chain.

        Returns:
            True if the locality belongs to the district and the district to the state
        """
        locality = self.find_locality(locality_id)
        district = self.find_district(district_id)
        state = self.find_state(state_id)
        if locality is None or district is None or state is None:
            return False
        return (
            normalize_id(locality.district_id) == normalize_id(district.id)
            and normalize_id(district.state_id) == normalize_id(state.id)
        )

    # ------------------------------------------------------------------
    # Diagnostics

    def validate(self) -> List[str]:
        """Integrity issues found at construction (duplicate ids, dangling references)."""
        return list(self._issues)

    def stats(self) -> Dict[str, int]:
        """Record counts per level."""
        return {
            'countries': len(self.countries),
            'states': len(self.states),
            'districts': len(self.districts),
            'localities': len(self.localities),
        }

    def __repr__(self) -> str:
        counts = ", ".join(f"{name}={count}" for name, count in self.stats().items())
        return f"HierarchyIndex({counts})"
