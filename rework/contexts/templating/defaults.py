"""
Default values for the ReWork canonical resume document.

Provides the named default-value policy used by:
- normalizer.py (fallbacks when a field is missing or unparseable)
- layout_engine.py (synthesized fallback bullet for empty job entries)

Keeping placeholders here avoids scattering literal strings across contexts.
"""

# Literal fallback when no name, first/last name or caller title is available
DEFAULT_FULL_NAME = "Professional Resume"

DEFAULT_JOB_TITLE = "Position"
DEFAULT_COMPANY = "Company Name"
DEFAULT_DEGREE = "Degree"
DEFAULT_INSTITUTION = "University"

# Canonical spelling of an open-ended end date
PRESENT = "present"

# Skill buckets flattened in this order so skill ordering is reproducible
SKILL_CATEGORIES = ("technical", "frameworks", "tools", "cloud", "databases", "soft")

# Coursework guards: longer entries are usually whole pasted paragraphs
MAX_COURSEWORK_CHARS = 100
MAX_COURSEWORK_ENTRIES = 4

# Aliased field names, checked in order
CONTACT_KEYS = ("contactInfo", "contact")
SUMMARY_KEYS = ("professionalSummary", "summary")
SUMMARY_TEXT_KEYS = ("summary", "optimized", "text")
EXPERIENCE_KEYS = ("workExperience", "experience")
JOB_TITLE_KEYS = ("jobTitle", "title", "position")
JOB_DESCRIPTION_KEYS = ("description", "responsibilities")
INSTITUTION_KEYS = ("institution", "school")
GRADUATION_KEYS = ("graduationYear", "year", "endDate")
COURSEWORK_KEYS = ("relevantCoursework", "coursework")
SKILL_ITEM_KEYS = ("name", "skill")


def fallback_bullet(title: str, company: str) -> str:
    """
    Synthesize a single bullet for a job entry that has no content.

    Args:
        title: Job title (may be empty)
        company: Company name (may be empty)

    Returns:
        Non-empty sentence derived from the title and company
    """
    title = title or DEFAULT_JOB_TITLE
    if company:
        return f"Served as {title} at {company}."
    return f"Served as {title}."
