"""
Resume Record Normalization

Parses the heterogeneous shapes a persisted resume record can take into one
canonical ResumeDocument:

1. **Aliased field names**: contactInfo/contact, workExperience/experience,
   jobTitle/title/position, institution/school, ...
2. **JSON-as-string**: any section may arrive JSON-encoded (as stored by the
   upload and AI-suggestion endpoints) or already decoded.
3. **Legacy vs. structured formats**: legacy {name, fullName} contact blocks,
   flat skill lists vs. categorized skill buckets, delimited coursework strings.

normalize() is a total function. Each section is parsed independently and a
section that cannot be parsed degrades to its default (logged as a warning)
instead of failing the render. Downstream contexts never see raw input.
"""

import json
import re
from typing import Any, Callable, Dict, Iterable, List, Optional, Pattern, Tuple, TypeVar

from rework.contexts.templating.defaults import (
    CONTACT_KEYS,
    COURSEWORK_KEYS,
    DEFAULT_FULL_NAME,
    EXPERIENCE_KEYS,
    GRADUATION_KEYS,
    INSTITUTION_KEYS,
    JOB_DESCRIPTION_KEYS,
    JOB_TITLE_KEYS,
    MAX_COURSEWORK_CHARS,
    MAX_COURSEWORK_ENTRIES,
    PRESENT,
    SKILL_CATEGORIES,
    SKILL_ITEM_KEYS,
    SUMMARY_KEYS,
    SUMMARY_TEXT_KEYS,
)
from rework.contexts.templating.logger import log_normalization_result, log_section_fallback
from rework.contexts.templating.resume_data_structure import (
    EduEntry,
    Identity,
    JobEntry,
    ResumeDocument,
)
from rework.utils.text_processing import clean_text, dedupe_preserving_order, strip_bullet_prefix

T = TypeVar("T")

# Achievements and coursework: one item per line or per bullet glyph
ITEM_DELIMITERS = re.compile(r"[\r\n]+|[•·▪●◦]")

# Skills and technologies: comma, bullet or pipe separated
SKILL_DELIMITERS = re.compile(r"[\r\n,•·|]+")

# End-date spellings that mean the role is ongoing
OPEN_ENDED_DATES = {PRESENT, "current", "now", "ongoing"}


# ============================================================================
# Value coercion helpers
# ============================================================================


def _parse_json_like(value: Any) -> Any:
    """
    Decode a JSON-encoded string; return anything else unchanged.

    Only strings that look like JSON documents (object, array or quoted
    string) are decoded. A string that fails to decode is returned as-is so
    callers can treat it as literal text.
    """
    if not isinstance(value, str):
        return value

    stripped = value.strip()
    if stripped[:1] not in ("{", "[", '"'):
        return value

    try:
        return json.loads(stripped)
    except (ValueError, RecursionError):
        return value


def _as_text(value: Any) -> str:
    """Coerce a scalar to cleaned text; containers and None become ''."""
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return clean_text(value)
    return ""


def _first_text(mapping: Dict[str, Any], keys: Iterable[str]) -> str:
    """Return the first non-empty text value among aliased keys."""
    for key in keys:
        text = _as_text(mapping.get(key))
        if text:
            return text
    return ""


def _as_mapping(value: Any) -> Dict[str, Any]:
    value = _parse_json_like(value)
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    value = _parse_json_like(value)
    return list(value) if isinstance(value, (list, tuple)) else []


def _item_text(item: Any) -> str:
    """Text of a list item: plain scalar, or a {name|skill} object."""
    if isinstance(item, dict):
        return _first_text(item, SKILL_ITEM_KEYS)
    return _as_text(item)


def _text_items(value: Any, delimiters: Pattern) -> List[str]:
    """
    Extract text items from a list, a JSON-encoded list, or a delimited string.

    Args:
        value: Raw value
        delimiters: Pattern used to split a plain string into items

    Returns:
        Non-empty, cleaned items in their original order
    """
    value = _parse_json_like(value)

    if isinstance(value, str):
        pieces = delimiters.split(value)
    elif isinstance(value, (list, tuple)):
        pieces = [_item_text(item) for item in value]
    else:
        return []

    items = [strip_bullet_prefix(clean_text(piece)) for piece in pieces if piece]
    return [item for item in items if item]


def _safely(section: str, parser: Callable[[], T], default: T) -> T:
    """Run a section parser, degrading to default on any failure."""
    try:
        return parser()
    except Exception as e:
        log_section_fallback(section, e)
        return default


# ============================================================================
# Section parsers
# ============================================================================


def normalize_identity(contact: Any, title: Optional[str] = None) -> Identity:
    """
    Build the header identity from a contact block.

    Name precedence: combined name (name, fullName) > first + last name >
    caller-supplied title > DEFAULT_FULL_NAME.

    Args:
        contact: Contact block (dict or JSON string), flat or legacy shape
        title: Caller-supplied fallback title (e.g., the resume's title)

    Returns:
        Identity with a non-empty full_name
    """
    contact = _as_mapping(contact)

    full_name = _first_text(contact, ("name", "fullName"))
    if not full_name:
        parts = (_as_text(contact.get("firstName")), _as_text(contact.get("lastName")))
        full_name = " ".join(part for part in parts if part)
    if not full_name:
        full_name = _as_text(title) or DEFAULT_FULL_NAME

    return Identity(
        full_name=full_name,
        email=_as_text(contact.get("email")),
        phone=_as_text(contact.get("phone")),
        location=_as_text(contact.get("location")),
        linkedin=_as_text(contact.get("linkedin")),
        website=_first_text(contact, ("website", "portfolio")),
        github=_first_text(contact, ("githubUrl", "github")),
    )


def normalize_summary(value: Any) -> str:
    """
    Extract summary text from a string, an object, or JSON encoding either.

    Objects carry the text under summary, optimized or text (first non-empty
    wins). A string that is not valid JSON, or decodes to an object with none
    of those keys, is the summary itself.
    """
    decoded = _parse_json_like(value)
    if isinstance(decoded, dict):
        return _first_text(decoded, SUMMARY_TEXT_KEYS) or _as_text(value)
    return _as_text(decoded)


def normalize_job(entry: Dict[str, Any]) -> JobEntry:
    """Build a JobEntry from one raw work experience object."""
    end_date = _as_text(entry.get("endDate"))
    if entry.get("isCurrentRole") is True or end_date.lower() in OPEN_ENDED_DATES or not end_date:
        end_date = PRESENT

    return JobEntry(
        title=_first_text(entry, JOB_TITLE_KEYS),
        company=_as_text(entry.get("company")),
        location=_as_text(entry.get("location")),
        start_date=_as_text(entry.get("startDate")),
        end_date=end_date,
        achievements=tuple(_text_items(entry.get("achievements"), ITEM_DELIMITERS)),
        technologies=tuple(
            dedupe_preserving_order(_text_items(entry.get("technologies"), SKILL_DELIMITERS))
        ),
        description=_first_text(entry, JOB_DESCRIPTION_KEYS),
    )


def normalize_experience(value: Any) -> Tuple[JobEntry, ...]:
    """Parse work experience, keeping caller order and skipping non-objects."""
    return tuple(normalize_job(entry) for entry in _as_list(value) if isinstance(entry, dict))


def normalize_coursework(value: Any) -> Tuple[str, ...]:
    """
    Parse coursework annotations.

    Strings are split on line breaks and bullet glyphs; arrays are used item
    by item. Entries of MAX_COURSEWORK_CHARS or more are dropped and at most
    MAX_COURSEWORK_ENTRIES are kept.

    Example:
        >>> normalize_coursework("Algorithms\\n• Databases\\n• Compilers")
        ('Algorithms', 'Databases', 'Compilers')
    """
    items = [c for c in _text_items(value, ITEM_DELIMITERS) if len(c) < MAX_COURSEWORK_CHARS]
    return tuple(dedupe_preserving_order(items)[:MAX_COURSEWORK_ENTRIES])


def normalize_education_entry(entry: Dict[str, Any]) -> EduEntry:
    """Build an EduEntry from one raw education object."""
    coursework_value = next((entry[key] for key in COURSEWORK_KEYS if entry.get(key)), None)
    return EduEntry(
        degree=_as_text(entry.get("degree")),
        field=_as_text(entry.get("field")),
        institution=_first_text(entry, INSTITUTION_KEYS),
        graduation_year=_first_text(entry, GRADUATION_KEYS),
        coursework=normalize_coursework(coursework_value),
    )


def normalize_education(value: Any) -> Tuple[EduEntry, ...]:
    return tuple(
        normalize_education_entry(entry) for entry in _as_list(value) if isinstance(entry, dict)
    )


def normalize_skills(value: Any) -> Tuple[str, ...]:
    """
    Flatten skills into one deduplicated, ordered tuple.

    A categorized object is flattened bucket by bucket in SKILL_CATEGORIES
    order (unknown buckets are ignored). A flat list, or a delimited string
    that is not JSON, is deduplicated as-is.
    """
    value = _parse_json_like(value)

    if isinstance(value, dict):
        items = []
        for category in SKILL_CATEGORIES:
            items.extend(_text_items(value.get(category), SKILL_DELIMITERS))
    else:
        items = _text_items(value, SKILL_DELIMITERS)

    return tuple(dedupe_preserving_order(items))


# ============================================================================
# Entry point
# ============================================================================


def _first_present(raw: Dict[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        if raw.get(key):
            return raw[key]
    return None


def normalize(raw: Any, title: Optional[str] = None) -> ResumeDocument:
    """
    Normalize a loosely typed resume record into a ResumeDocument.

    Never raises: a record that is not an object (or a JSON-encoded object)
    yields the placeholder document, and each unparseable section falls back
    to its default.

    Args:
        raw: Persisted resume record (dict or JSON string)
        title: Caller-supplied title used when the record carries no name
            (defaults to the record's own "title" field)

    Returns:
        Canonical ResumeDocument

    Example:
        >>> doc = normalize({"contactInfo": {"firstName": "Ada", "lastName": "Lovelace"}})
        >>> doc.identity.full_name
        'Ada Lovelace'
    """
    raw = _as_mapping(raw)

    if title is None:
        title = _as_text(raw.get("title"))

    contact = _first_present(raw, CONTACT_KEYS)
    if contact is None:
        # Flat records keep contact fields at the top level
        contact = raw

    document = ResumeDocument(
        identity=_safely("contact", lambda: normalize_identity(contact, title), Identity()),
        summary=_safely("summary", lambda: normalize_summary(_first_present(raw, SUMMARY_KEYS)), ""),
        experience=_safely(
            "experience", lambda: normalize_experience(_first_present(raw, EXPERIENCE_KEYS)), ()
        ),
        education=_safely("education", lambda: normalize_education(raw.get("education")), ()),
        skills=_safely("skills", lambda: normalize_skills(raw.get("skills")), ()),
    )

    log_normalization_result(document)
    return document
