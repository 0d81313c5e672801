"""
Resume Document Structure

Defines the canonical, immutable representation of resume content.
This structure is the interface between the Templating, Targeting and Layout contexts.

Templating owns:
- Normalizing heterogeneous raw records into ResumeDocument instances

Targeting and Layout only ever read ResumeDocument instances, never raw input.
"""

from dataclasses import dataclass, field
from typing import Tuple

from rework.contexts.templating.defaults import DEFAULT_FULL_NAME, PRESENT


@dataclass(frozen=True)
class Identity:
    """
    Contact block shown in the document header.

    Attributes:
        full_name: Display name (never empty)
        email: Email address
        phone: Phone number
        location: "City, State" style location
        linkedin: Professional network profile URL
        website: Personal site URL
        github: Code-hosting profile URL
    """

    full_name: str = DEFAULT_FULL_NAME
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    website: str = ""
    github: str = ""

    @property
    def contact_line(self) -> str:
        """Non-empty contact fields joined for a single header line."""
        return " • ".join(part for part in (self.email, self.phone, self.location) if part)

    @property
    def links(self) -> Tuple[str, ...]:
        return tuple(link for link in (self.linkedin, self.website, self.github) if link)


@dataclass(frozen=True)
class JobEntry:
    """
    A single work experience entry.

    Attributes:
        title: Job title
        company: Employer name
        location: Optional location
        start_date: Free-form start date (e.g., "2021-03")
        end_date: Free-form end date, or "present"
        achievements: Achievement bullets in caller order
        technologies: Deduplicated technologies used in the role
        description: Prose description, used when there are no achievements
    """

    title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = PRESENT
    achievements: Tuple[str, ...] = ()
    technologies: Tuple[str, ...] = ()
    description: str = ""

    @property
    def is_current(self) -> bool:
        return self.end_date == PRESENT

    @property
    def date_range(self) -> str:
        end = "Present" if self.is_current else self.end_date
        if self.start_date:
            return f"{self.start_date} - {end}"
        return end

    @property
    def content_length(self) -> int:
        return len(self.description) + sum(len(a) for a in self.achievements)


@dataclass(frozen=True)
class EduEntry:
    """A single education entry with optional coursework annotations."""

    degree: str = ""
    field: str = ""
    institution: str = ""
    graduation_year: str = ""
    coursework: Tuple[str, ...] = ()

    @property
    def heading(self) -> str:
        if self.degree and self.field:
            return f"{self.degree} in {self.field}"
        return self.degree or self.field


@dataclass(frozen=True)
class ResumeDocument:
    """
    Canonical representation of a complete resume.

    Recomputed fresh on every render from the persisted record and never
    mutated afterwards. All sequences are tuples so instances are hashable
    and safe to share between concurrent renders.
    """

    identity: Identity = field(default_factory=Identity)
    summary: str = ""
    experience: Tuple[JobEntry, ...] = ()
    education: Tuple[EduEntry, ...] = ()
    skills: Tuple[str, ...] = ()

    @property
    def total_content_length(self) -> int:
        """
        Aggregate content volume used to pick a font-size tier.

        Counts summary, job descriptions and achievements, and the skills as
        they would be listed inline.
        """
        return (
            len(self.summary)
            + sum(job.content_length for job in self.experience)
            + len(", ".join(self.skills))
        )

    @property
    def is_empty(self) -> bool:
        return not (self.summary or self.experience or self.education or self.skills)

    @property
    def table_of_contents(self) -> str:
        """
        Get formatted overview of the document sections.

        Returns:
            One line per section with entry counts
        """
        lines = [
            f"Name       | {self.identity.full_name}",
            f"Summary    | {len(self.summary)} chars",
            f"Experience | {len(self.experience)} entries, "
            f"{sum(len(job.achievements) for job in self.experience)} achievements",
            f"Education  | {len(self.education)} entries",
            f"Skills     | {len(self.skills)} items",
        ]
        return "\n".join(lines)
