"""
Cascading State -> District -> Locality selection.

This module provides the CascadeSelector state machine used by forms that
pick a locality through its state and district (birth place, address,
pipeline terminal, ...). Each transition clears exactly the selections that
depend on it and recomputes the next candidate list from a shared, read-only
HierarchyIndex. Several selectors may share one index; none share state.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple

from ..exceptions import CascadeStateError, NotFoundError
from ..models import District, Locality
from ..utils.data_utils import is_null_or_empty
from .hierarchy_index import HierarchyIndex, normalize_id


class CascadeState(Enum):
    """Selection progress of a cascade."""
    EMPTY = 'empty'
    STATE_CHOSEN = 'state_chosen'
    DISTRICT_CHOSEN = 'district_chosen'
    LOCALITY_CHOSEN = 'locality_chosen'


@dataclass(frozen=True)
class CascadeSnapshot:
    """Read-only view of a selector, suitable for rendering a form."""
    state: CascadeState
    state_id: Optional[int]
    district_id: Optional[int]
    locality_id: Optional[int]
    district_candidates: Tuple[District, ...]
    locality_candidates: Tuple[Locality, ...]


def _is_empty_choice(value: Any) -> bool:
    """Empty strings, None and NaN all mean 'nothing selected'."""
    return is_null_or_empty(value)


class CascadeSelector:
    """
    Four-state machine driving dependent State -> District -> Locality choices.

    States: EMPTY -> STATE_CHOSEN -> DISTRICT_CHOSEN -> LOCALITY_CHOSEN.
    Only hydrate_from_locality jumps straight to LOCALITY_CHOSEN, and it
    resolves the whole ancestry before touching the selection.
    """

    def __init__(self, index: HierarchyIndex, label: str = "cascade",
                 logger: Optional[logging.Logger] = None):
        """
        Initialize an empty selector.

        Args:
            index: Shared hierarchy index (never modified by the selector)
            label: Name used in log and error messages (e.g. 'birth_place')
            logger: Optional logger instance
        """
        self.index = index
        self.label = label
        self.logger = logger or logging.getLogger(__name__)
        self.reset()

    # ------------------------------------------------------------------
    # State

    @property
    def state(self) -> CascadeState:
        if self._locality_id is not None:
            return CascadeState.LOCALITY_CHOSEN
        if self._district_id is not None:
            return CascadeState.DISTRICT_CHOSEN
        if self._state_id is not None:
            return CascadeState.STATE_CHOSEN
        return CascadeState.EMPTY

    @property
    def state_id(self) -> Optional[int]:
        return self._state_id

    @property
    def district_id(self) -> Optional[int]:
        return self._district_id

    @property
    def locality_id(self) -> Optional[int]:
        return self._locality_id

    @property
    def district_candidates(self) -> List[District]:
        return list(self._district_candidates)

    @property
    def locality_candidates(self) -> List[Locality]:
        return list(self._locality_candidates)

    def snapshot(self) -> CascadeSnapshot:
        """Capture the current selection and candidate lists."""
        return CascadeSnapshot(
            state=self.state,
            state_id=self._state_id,
            district_id=self._district_id,
            locality_id=self._locality_id,
            district_candidates=self._district_candidates,
            locality_candidates=self._locality_candidates
        )

    # ------------------------------------------------------------------
    # Transitions

    def reset(self):
        """Return to EMPTY, clearing every selection and candidate list."""
        self._state_id: Optional[int] = None
        self._district_id: Optional[int] = None
        self._locality_id: Optional[int] = None
        self._district_candidates: Tuple[District, ...] = ()
        self._locality_candidates: Tuple[Locality, ...] = ()

    def choose_state(self, state_id: Any) -> List[District]:
        """
        Select a state from any state of the cascade.

        Clears the district and locality selections and recomputes the
        district candidates. An empty id returns the cascade to EMPTY.

        Args:
            state_id: Identifier of the chosen state, or an empty value

        Returns:
            The district candidates for the chosen state

        Raises:
            NotFoundError: If the state is not in the index
        """
        if _is_empty_choice(state_id):
            self.reset()
            return []

        state = self.index.get_state(state_id)
        self._state_id = normalize_id(state.id)
        self._clear_district()
        self._district_candidates = tuple(self.index.districts_of_state(self._state_id))
        self.logger.debug(
            f"[{self.label}] state {self._state_id} chosen, "
            f"{len(self._district_candidates)} district candidate(s)"
        )
        return list(self._district_candidates)

    def choose_district(self, district_id: Any) -> List[Locality]:
        """
        Select a district of the chosen state.

        Clears the locality selection and recomputes the locality candidates.
        An empty id returns the cascade to STATE_CHOSEN.

        Args:
            district_id: Identifier of the chosen district, or an empty value

        Returns:
            The locality candidates for the chosen district

        Raises:
            CascadeStateError: If no state is chosen or the district belongs
                to another state
            NotFoundError: If the district is not in the index
        """
        self._require(self._state_id is not None, 'choose_district', "choose a state first")

        if _is_empty_choice(district_id):
            self._clear_district()
            return []

        district = self.index.get_district(district_id)
        self._require(
            normalize_id(district.state_id) == self._state_id,
            'choose_district',
            f"district {district.id} does not belong to state {self._state_id}"
        )
        self._district_id = normalize_id(district.id)
        self._locality_id = None
        self._locality_candidates = tuple(self.index.localities_of_district(self._district_id))
        self.logger.debug(
            f"[{self.label}] district {self._district_id} chosen, "
            f"{len(self._locality_candidates)} locality candidate(s)"
        )
        return list(self._locality_candidates)

    def choose_locality(self, locality_id: Any) -> Optional[int]:
        """
        Select a locality of the chosen district.

        An empty id returns the cascade to DISTRICT_CHOSEN.

        Args:
            locality_id: Identifier of the chosen locality, or an empty value

        Returns:
            The selected locality id (None when cleared)

        Raises:
            CascadeStateError: If no district is chosen or the locality belongs
                to another district
            NotFoundError: If the locality is not in the index
        """
        self._require(self._district_id is not None, 'choose_locality', "choose a district first")

        if _is_empty_choice(locality_id):
            self._locality_id = None
            return None

        locality = self.index.get_locality(locality_id)
        self._require(
            normalize_id(locality.district_id) == self._district_id,
            'choose_locality',
            f"locality {locality.id} does not belong to district {self._district_id}"
        )
        self._locality_id = normalize_id(locality.id)
        return self._locality_id

    def hydrate_from_locality(self, locality_id: Any) -> CascadeSnapshot:
        """
        Set state, district and locality at once from a persisted locality id.

        Used when opening an edit form. The ancestry is resolved completely
        before anything changes, so a failure leaves the selector as it was.

        Args:
            locality_id: Locality referenced by the record being edited

        Returns:
            Snapshot of the hydrated selector

        Raises:
            NotFoundError: If the locality or any of its ancestors is missing
        """
        try:
            chain = self.index.ancestry_of_locality(locality_id)
        except NotFoundError as e:
            self.logger.warning(f"[{self.label}] cannot hydrate from locality {locality_id}: {e}")
            raise

        state_id, district_id, chosen_locality_id = (normalize_id(value) for value in chain.ids())
        self._state_id = state_id
        self._district_id = district_id
        self._locality_id = chosen_locality_id
        self._district_candidates = tuple(self.index.districts_of_state(state_id))
        self._locality_candidates = tuple(self.index.localities_of_district(district_id))
        return self.snapshot()

    # ------------------------------------------------------------------
    # Commit

    def committed_locality_id(self) -> Optional[int]:
        """
        The locality id a form may submit.

        Returns the leaf only when the current state, district and locality
        still form one chain in the index; otherwise None.
        """
        if self.state is not CascadeState.LOCALITY_CHOSEN:
            return None
        if not self.index.is_consistent(self._state_id, self._district_id, self._locality_id):
            self.logger.warning(
                f"[{self.label}] locality {self._locality_id} is not consistent with "
                f"district {self._district_id} and state {self._state_id}"
            )
            return None
        return self._locality_id

    # ------------------------------------------------------------------
    # Helpers

    def _clear_district(self):
        self._district_id = None
        self._locality_id = None
        self._locality_candidates = ()

    def _require(self, condition: bool, transition: str, reason: str):
        if not condition:
            raise CascadeStateError(
                f"[{self.label}] cannot {transition.replace('_', ' ')}: {reason}",
                transition=transition,
                current_state=self.state.value,
                selector=self.label
            )

    def __repr__(self) -> str:
        return (
            f"CascadeSelector(label={self.label!r}, state={self.state.value}, "
            f"state_id={self._state_id}, district_id={self._district_id}, "
            f"locality_id={self._locality_id})"
        )
