"""Tests for the cascading State -> District -> Locality selector."""
import pytest

from hyflo_localization.exceptions import CascadeStateError, NotFoundError
from hyflo_localization.hierarchy import CascadeSelector, CascadeState


@pytest.fixture
def selector(index):
    return CascadeSelector(index, label="birth_place")


def test_new_selector_is_empty(selector):
    assert selector.state is CascadeState.EMPTY
    assert selector.district_candidates == []
    assert selector.locality_candidates == []
    assert selector.committed_locality_id() is None


def test_full_cascade(selector):
    districts = selector.choose_state(16)
    assert [d.id for d in districts] == [1, 2]
    assert selector.state is CascadeState.STATE_CHOSEN

    localities = selector.choose_district(1)
    assert [loc.id for loc in localities] == [100, 101]
    assert selector.state is CascadeState.DISTRICT_CHOSEN

    assert selector.choose_locality(101) == 101
    assert selector.state is CascadeState.LOCALITY_CHOSEN
    assert selector.committed_locality_id() == 101


def test_changing_state_clears_dependent_choices(selector):
    selector.choose_state(16)
    selector.choose_district(1)
    selector.choose_locality(100)

    districts = selector.choose_state(31)

    assert selector.state is CascadeState.STATE_CHOSEN
    assert selector.district_id is None
    assert selector.locality_id is None
    assert selector.locality_candidates == []
    assert [d.id for d in districts] == [3]
    assert all(d.state_id == 31 for d in selector.district_candidates)


def test_changing_district_clears_locality(selector):
    selector.choose_state(16)
    selector.choose_district(1)
    selector.choose_locality(100)

    assert selector.choose_district(2) == []
    assert selector.state is CascadeState.DISTRICT_CHOSEN
    assert selector.locality_id is None


def test_clearing_choices_steps_back(selector):
    selector.choose_state(16)
    selector.choose_district(1)
    selector.choose_locality(100)

    assert selector.choose_locality("") is None
    assert selector.state is CascadeState.DISTRICT_CHOSEN

    assert selector.choose_district(None) == []
    assert selector.state is CascadeState.STATE_CHOSEN

    assert selector.choose_state("") == []
    assert selector.state is CascadeState.EMPTY


def test_choose_district_requires_state(selector):
    with pytest.raises(CascadeStateError) as exc_info:
        selector.choose_district(1)
    error = exc_info.value
    assert error.transition == 'choose_district'
    assert error.current_state == 'empty'
    assert error.selector == "birth_place"
    assert "choose a state first" in error.message


def test_choose_locality_requires_district(selector):
    selector.choose_state(16)
    with pytest.raises(CascadeStateError):
        selector.choose_locality(100)


def test_district_of_another_state_is_rejected(selector):
    selector.choose_state(16)
    with pytest.raises(CascadeStateError):
        selector.choose_district(3)
    assert selector.state is CascadeState.STATE_CHOSEN


def test_locality_of_another_district_is_rejected(selector):
    selector.choose_state(16)
    selector.choose_district(1)
    with pytest.raises(CascadeStateError):
        selector.choose_locality(300)
    assert selector.locality_id is None


def test_unknown_state_leaves_selection_unchanged(selector):
    selector.choose_state(16)
    with pytest.raises(NotFoundError):
        selector.choose_state(404)
    assert selector.state_id == 16
    assert [d.id for d in selector.district_candidates] == [1, 2]


def test_hydrate_from_locality(selector):
    snapshot = selector.hydrate_from_locality(300)
    assert snapshot.state is CascadeState.LOCALITY_CHOSEN
    assert (snapshot.state_id, snapshot.district_id, snapshot.locality_id) == (31, 3, 300)
    assert [d.id for d in snapshot.district_candidates] == [3]
    assert [loc.id for loc in snapshot.locality_candidates] == [300]
    assert selector.committed_locality_id() == 300


def test_hydrate_accepts_string_id(selector):
    selector.hydrate_from_locality("100")
    assert (selector.state_id, selector.district_id, selector.locality_id) == (16, 1, 100)


def test_failed_hydration_leaves_selector_unchanged(selector):
    selector.choose_state(16)
    selector.choose_district(1)
    with pytest.raises(NotFoundError):
        selector.hydrate_from_locality(900)
    assert selector.state is CascadeState.DISTRICT_CHOSEN
    assert (selector.state_id, selector.district_id) == (16, 1)


def test_selectors_sharing_an_index_are_independent(index):
    birth = CascadeSelector(index, label="birth_place")
    address = CascadeSelector(index, label="address")
    birth.choose_state(16)
    address.choose_state(31)
    assert birth.state_id == 16
    assert address.state_id == 31


def test_reset(selector):
    selector.hydrate_from_locality(100)
    selector.reset()
    assert selector.state is CascadeState.EMPTY
    assert selector.snapshot().district_candidates == ()


def test_candidates_are_copies(selector):
    selector.choose_state(16)
    selector.district_candidates.clear()
    assert len(selector.district_candidates) == 2
