"""Tests for multilingual label resolution."""
import pytest

from hyflo_localization.config import LocalizationConfig
from hyflo_localization.labels import (
    LabelResolver,
    normalize_language,
    resolve_label,
    sort_by_label,
    filter_by_label,
    suggest_by_label,
    format_label,
    build_options,
)
from hyflo_localization.models import State, District, Location


FULL = {"designationAr": "وهران", "designationEn": "Oran EN", "designationFr": "Oran FR", "code": "ORN", "id": 31}


@pytest.mark.parametrize("language, expected", [
    ("fr-FR", "fr"),
    ("en_US", "en"),
    ("AR", "ar"),
    ("de-DE", "fr"),
    ("", "fr"),
    (None, "fr"),
])
def test_normalize_language(language, expected):
    """Locale tags reduce to a supported two-letter code."""
    assert normalize_language(language) == expected


def test_normalize_language_uses_configured_base():
    assert normalize_language("es", base_language="en") == "en"


@pytest.mark.parametrize("language, missing, expected", [
    # Arabic falls back to French, then English
    ("ar", ["designationAr"], "Oran FR"),
    ("ar", ["designationAr", "designationFr"], "Oran EN"),
    # English falls back to French, then Arabic
    ("en", ["designationEn"], "Oran FR"),
    ("en", ["designationEn", "designationFr"], "وهران"),
    # French and unknown languages fall back to English, then Arabic
    ("fr", ["designationFr"], "Oran EN"),
    ("fr", ["designationFr", "designationEn"], "وهران"),
    ("it", ["designationFr"], "Oran EN"),
])
def test_resolve_label_fallback_order(language, missing, expected):
    entity = {key: value for key, value in FULL.items() if key not in missing}
    assert resolve_label(entity, language) == expected


def test_resolve_label_prefers_requested_language():
    assert resolve_label(FULL, "ar-DZ") == "وهران"
    assert resolve_label(FULL, "en") == "Oran EN"
    assert resolve_label(FULL, "fr") == "Oran FR"


def test_resolve_label_only_french_requested_in_arabic():
    assert resolve_label({"designationFr": "Alger"}, "ar") == "Alger"


def test_resolve_label_blank_designations_fall_back_to_code():
    entity = State(id=4, code="TLM", designation_fr="   ", designation_en="")
    assert resolve_label(entity, "en") == "TLM"


def test_resolve_label_falls_back_to_id():
    assert resolve_label({"id": 7}, "en") == "7"
    assert resolve_label(State(id=7), "fr") == "7"


def test_resolve_label_never_raises_on_empty_input():
    assert resolve_label(None, "fr") == ""
    assert resolve_label({}, "en") == ""
    assert resolve_label(object(), None) == ""


def test_resolve_label_non_empty_when_code_or_id_present():
    for entity in (State(code="X"), State(id=0), District(id=12, state_id=1)):
        for language in ("ar", "en", "fr", "xx", "", None):
            assert resolve_label(entity, language) != ""


def test_resolve_label_location_uses_place_name():
    location = Location(id=3, place_name="PK12", latitude=1.0, longitude=2.0)
    assert resolve_label(location, "fr") == "PK12"


def test_sort_by_label_is_accent_and_case_insensitive(states):
    items = [
        State(id=1, code="B", designation_fr="béjaïa"),
        State(id=2, code="A", designation_fr="Adrar"),
        State(id=3, code="C", designation_fr="Blida"),
        State(id=4, code="D", designation_fr="Annaba"),
    ]
    ordered = sort_by_label(items, "fr")
    assert [item.id for item in ordered] == [2, 4, 1, 3]
    # Input untouched
    assert [item.id for item in items] == [1, 2, 3, 4]


def test_sort_by_label_is_stable_for_equal_labels():
    items = [State(id=1, code="X1", designation_fr="Same"), State(id=2, code="X2", designation_fr="same")]
    assert [item.id for item in sort_by_label(items, "fr")] == [1, 2]


def test_filter_by_label_matches_label_or_code(states):
    assert [s.id for s in filter_by_label(states, "alg", "fr")] == [16]
    assert [s.id for s in filter_by_label(states, "orn", "fr")] == [31]
    assert [s.id for s in filter_by_label(states, "PROVINCE", "en")] == [31]
    assert filter_by_label(states, "zzz", "fr") == []


def test_filter_by_label_empty_term_keeps_everything(states):
    assert filter_by_label(states, "", "fr") == states
    assert filter_by_label(states, None, "fr") == states


def test_suggest_by_label_tolerates_typos(states):
    suggestions = suggest_by_label(states, "Algre", "fr", score_cutoff=60)
    assert suggestions and suggestions[0].id == 16


def test_suggest_by_label_empty_term():
    assert suggest_by_label([State(id=1, designation_fr="Alger")], "", "fr") == []


@pytest.mark.parametrize("code, designation, expected", [
    ("ALG", "Alger", "ALG - Alger"),
    (None, "Alger", "Alger"),
    ("ALG", None, "ALG"),
    (None, None, "-"),
])
def test_format_label(code, designation, expected):
    assert format_label(code, designation) == expected


def test_build_options_sorted_and_skips_records_without_id():
    items = [
        State(id=2, code="ORN", designation_fr="Oran"),
        State(code="NEW", designation_fr="Nouveau"),
        State(id=1, code="ALG", designation_fr="Alger"),
    ]
    assert build_options(items, "fr") == [
        {"value": 1, "label": "Alger", "code": "ALG"},
        {"value": 2, "label": "Oran", "code": "ORN"},
    ]


def test_label_resolver_uses_configured_base_language():
    resolver = LabelResolver(LocalizationConfig(base_language="en"))
    # Unknown language resolves through the English chain
    assert resolver.resolve(FULL, "de") == "Oran EN"
    assert resolver.normalize(None) == "en"


@pytest.mark.parametrize("base_language, expected", [
    ("de", "fr"),
    ("FR", "fr"),
    ("EN-gb", "en"),
    ("", "fr"),
    (None, "fr"),
])
def test_unsupported_base_language_falls_back_to_french(base_language, expected):
    assert normalize_language("xx", base_language=base_language) == expected


def test_resolve_label_with_unsupported_base_language():
    assert resolve_label({"code": "ALG"}, "de", base_language="de") == "ALG"
    assert resolve_label(FULL, None, base_language="EN") == "Oran EN"
