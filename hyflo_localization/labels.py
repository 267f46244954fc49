"""
Multilingual label resolution.

This module resolves the display label of any record carrying Arabic,
English and French designations, and provides the sorting, filtering and
fuzzy suggestion helpers used to populate selection lists. Every function
here is pure and never raises on missing data: display code sits directly
on top of it.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, TypeVar

from rapidfuzz import fuzz, process

from .config import LocalizationConfig, DEFAULT_CONFIG
from .utils.data_utils import collation_key, is_null_or_empty, safe_string_conversion

T = TypeVar('T')

# Fallback order per requested language; anything unrecognized uses 'fr'
FALLBACK_ORDER: Dict[str, tuple] = {
    'ar': ('ar', 'fr', 'en'),
    'en': ('en', 'fr', 'ar'),
    'fr': ('fr', 'en', 'ar'),
}

_FIELD_NAMES = {
    'ar': ('designation_ar', 'designationAr'),
    'en': ('designation_en', 'designationEn'),
    'fr': ('designation_fr', 'designationFr'),
}

logger = logging.getLogger(__name__)


def normalize_language(language: Optional[str], base_language: str = 'fr') -> str:
    """
    Reduce a locale tag to a supported two-letter language code.

    Args:
        language: Free-form locale tag ('fr-FR', 'ar', 'en_US', ...)
        base_language: Language returned for missing or unknown tags;
            itself reduced to 'fr' when unsupported

    Returns:
        One of 'ar', 'en', 'fr'
    """
    base = _language_code(base_language) or 'fr'
    return _language_code(language) or base


def _language_code(language: Any) -> Optional[str]:
    """Two-letter code of a locale tag, or None when missing or unsupported."""
    if not isinstance(language, str) or not language.strip():
        return None
    code = language.strip()[:2].lower()
    return code if code in FALLBACK_ORDER else None


def _read(entity: Any, names: Sequence[str]) -> Any:
    """Read the first present attribute (or dict key) among names."""
    for name in names:
        if isinstance(entity, dict):
            value = entity.get(name)
        else:
            value = getattr(entity, name, None)
        if not is_null_or_empty(value):
            return value
    return None


def resolve_label(entity: Any, language: Optional[str], base_language: str = 'fr') -> str:
    """
    Resolve the display label of a designated record.

    The requested language's designation wins when present and non-blank,
    then the remaining two languages in a fixed order, then the code, then
    the id. Accepts dataclass records and raw backend dicts alike.

    Args:
        entity: Record exposing designation fields, or None
        language: Requested locale tag
        base_language: Language used when the tag is missing or unknown

    Returns:
        The resolved label, or an empty string when nothing is available
    """
    if entity is None:
        return ""

    lang = normalize_language(language, base_language)
    for candidate in FALLBACK_ORDER[lang]:
        value = _read(entity, _FIELD_NAMES[candidate])
        if value is not None:
            return safe_string_conversion(value)

    code = _read(entity, ('code',))
    if code is not None:
        return safe_string_conversion(code)

    entity_id = _read(entity, ('id',))
    if entity_id is not None:
        return str(entity_id)

    return ""


def sort_by_label(items: Iterable[T], language: Optional[str],
                  base_language: str = 'fr') -> List[T]:
    """
    Sort records by resolved label without mutating the input.

    Ordering ignores case and accents; ties keep their input order.
    """
    return sorted(
        items,
        key=lambda item: collation_key(resolve_label(item, language, base_language))
    )


def filter_by_label(items: Iterable[T], term: Optional[str], language: Optional[str],
                    base_language: str = 'fr') -> List[T]:
    """
    Keep records whose resolved label or code contains the search term.

    Matching is case-insensitive. An empty term keeps every record.
    """
    items = list(items)
    if is_null_or_empty(term):
        return items

    needle = term.strip().casefold()
    matches = []
    for item in items:
        label = resolve_label(item, language, base_language).casefold()
        code = safe_string_conversion(_read(item, ('code',))).casefold()
        if needle in label or needle in code:
            matches.append(item)
    return matches


def suggest_by_label(items: Iterable[T], term: Optional[str], language: Optional[str],
                     limit: int = 10, score_cutoff: int = 80,
                     base_language: str = 'fr') -> List[T]:
    """
    Suggest records whose label is close to a possibly misspelled term.

    Args:
        items: Candidate records
        term: Text typed by the user
        language: Requested locale tag
        limit: Maximum number of suggestions
        score_cutoff: Minimum similarity score (0-100)
        base_language: Language used when the tag is missing or unknown

    Returns:
        Records ordered by decreasing similarity
    """
    items = list(items)
    if is_null_or_empty(term) or not items:
        return []

    choices = {
        position: collation_key(resolve_label(item, language, base_language))
        for position, item in enumerate(items)
    }
    matches = process.extract(
        collation_key(term.strip()),
        choices,
        scorer=fuzz.WRatio,
        limit=limit,
        score_cutoff=score_cutoff
    )
    logger.debug(f"{len(matches)} suggestion(s) for '{term}' among {len(items)} records")
    return [items[position] for _, _, position in matches]


def format_label(code: Optional[str], designation: Optional[str]) -> str:
    """Format a 'CODE - Designation' label with '-' as the empty placeholder."""
    code = safe_string_conversion(code)
    designation = safe_string_conversion(designation)
    if not code and not designation:
        return '-'
    if not code:
        return designation
    if not designation:
        return code
    return f"{code} - {designation}"


def build_options(items: Iterable[Any], language: Optional[str],
                  base_language: str = 'fr') -> List[Dict[str, Any]]:
    """
    Build dropdown options ({value, label, code}) sorted by label.

    Records without an id cannot be selected and are skipped.
    """
    options = []
    for item in sort_by_label(items, language, base_language):
        value = _read(item, ('id',))
        if value is None:
            continue
        options.append({
            'value': value,
            'label': resolve_label(item, language, base_language),
            'code': safe_string_conversion(_read(item, ('code',))),
        })
    return options


class LabelResolver:
    """
    Label resolution bound to a configured base language.

    Thin convenience wrapper around the module functions so callers can
    carry one object instead of threading the base language everywhere.
    The requested language is still passed explicitly on every call.
    """

    def __init__(self, config: Optional[LocalizationConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.base_language = self.config.base_language

    def normalize(self, language: Optional[str]) -> str:
        return normalize_language(language, self.base_language)

    def resolve(self, entity: Any, language: Optional[str]) -> str:
        return resolve_label(entity, language, self.base_language)

    def sort(self, items: Iterable[T], language: Optional[str]) -> List[T]:
        return sort_by_label(items, language, self.base_language)

    def filter(self, items: Iterable[T], term: Optional[str],
               language: Optional[str]) -> List[T]:
        return filter_by_label(items, term, language, self.base_language)

    def suggest(self, items: Iterable[T], term: Optional[str],
                language: Optional[str]) -> List[T]:
        return suggest_by_label(
            items, term, language,
            limit=self.config.suggestion_limit,
            score_cutoff=self.config.suggestion_threshold,
            base_language=self.base_language
        )

    def options(self, items: Iterable[Any], language: Optional[str]) -> List[Dict[str, Any]]:
        return build_options(items, language, self.base_language)
