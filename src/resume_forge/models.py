
# Copyright 2026 Justin Cook
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Data models for the resume editor.

Every record is a frozen dataclass. Edits go through `dataclasses.replace`
(see editor.py), so a Resume handed to a renderer never changes underneath it.
"""

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import ClassVar, Dict, List, Tuple, Union

from resume_forge.errors import StructureError


def new_id() -> str:
    return uuid.uuid4().hex


class SectionShape(str, Enum):
    """The fixed field layout shared by every entry of a section."""
    EXPERIENCE = "experience"
    EDUCATION = "education"
    STANDARD_FULL = "standard_full"
    STANDARD_ONE_HEADLINE = "standard_one_headline"
    STANDARD_BULLETS_ONLY = "standard_bullets_only"
    TEXT = "text"


@dataclass(frozen=True)
class Spacing:
    """Vertical whitespace directives for one rendered zone."""
    before: bool = False
    after: bool = False
    ultra_tight: bool = False

    def with_before(self, value: bool) -> "Spacing":
        return replace(self, before=value)

    def with_after(self, value: bool) -> "Spacing":
        return replace(self, after=value)

    def with_ultra_tight(self, value: bool) -> "Spacing":
        return replace(self, ultra_tight=value)


# Defaults shared by the template, the importer and the editor
COMPACT = Spacing()
DESC_TIGHT = Spacing(before=False, after=True, ultra_tight=True)
DESC_LOOSE = Spacing(before=True, after=True, ultra_tight=False)
SECTION_TITLE_SPACING = Spacing(before=True, after=False)
TEXT_CONTENT_SPACING = Spacing(before=False, after=True)


@dataclass(frozen=True)
class HeaderSpacing:
    name: Spacing = COMPACT
    title: Spacing = COMPACT
    contact: Spacing = Spacing(before=False, after=True)

    ZONES: ClassVar[Tuple[str, ...]] = ("name", "title", "contact")


@dataclass(frozen=True)
class ExperienceEntry:
    """A job: bold title/dates line, italic company/location line, description."""
    title: str = ""
    company: str = ""
    location: str = ""
    dates: str = ""
    desc: str = ""
    header_spacing: Spacing = COMPACT
    subheader_spacing: Spacing = COMPACT
    desc_spacing: Spacing = DESC_TIGHT
    id: str = field(default_factory=new_id, compare=False)

    TEXT_FIELDS: ClassVar[Tuple[str, ...]] = ("title", "company", "location", "dates", "desc")
    ZONES: ClassVar[Tuple[str, ...]] = ("header", "subheader", "desc")


@dataclass(frozen=True)
class EducationEntry:
    degree: str = ""
    university: str = ""
    location: str = ""
    dates: str = ""
    desc: str = ""
    header_spacing: Spacing = COMPACT
    subheader_spacing: Spacing = COMPACT
    desc_spacing: Spacing = DESC_TIGHT
    id: str = field(default_factory=new_id, compare=False)

    TEXT_FIELDS: ClassVar[Tuple[str, ...]] = ("degree", "university", "location", "dates", "desc")
    ZONES: ClassVar[Tuple[str, ...]] = ("header", "subheader", "desc")


@dataclass(frozen=True)
class StandardFullEntry:
    """Two label/date headline lines followed by a description."""
    headline1_left: str = ""
    headline1_right: str = ""
    headline2_left: str = ""
    headline2_right: str = ""
    desc: str = ""
    headline1_spacing: Spacing = COMPACT
    headline2_spacing: Spacing = COMPACT
    desc_spacing: Spacing = DESC_TIGHT
    id: str = field(default_factory=new_id, compare=False)

    TEXT_FIELDS: ClassVar[Tuple[str, ...]] = (
        "headline1_left", "headline1_right", "headline2_left", "headline2_right", "desc"
    )
    ZONES: ClassVar[Tuple[str, ...]] = ("headline1", "headline2", "desc")


@dataclass(frozen=True)
class OneHeadlineEntry:
    headline_left: str = ""
    headline_right: str = ""
    desc: str = ""
    headline1_spacing: Spacing = COMPACT
    desc_spacing: Spacing = DESC_TIGHT
    id: str = field(default_factory=new_id, compare=False)

    TEXT_FIELDS: ClassVar[Tuple[str, ...]] = ("headline_left", "headline_right", "desc")
    ZONES: ClassVar[Tuple[str, ...]] = ("headline1", "desc")


@dataclass(frozen=True)
class BulletsOnlyEntry:
    desc: str = ""
    desc_spacing: Spacing = DESC_LOOSE
    id: str = field(default_factory=new_id, compare=False)

    TEXT_FIELDS: ClassVar[Tuple[str, ...]] = ("desc",)
    ZONES: ClassVar[Tuple[str, ...]] = ("desc",)


Entry = Union[ExperienceEntry, EducationEntry, StandardFullEntry, OneHeadlineEntry, BulletsOnlyEntry]

ENTRY_TYPES: Dict[SectionShape, type] = {
    SectionShape.EXPERIENCE: ExperienceEntry,
    SectionShape.EDUCATION: EducationEntry,
    SectionShape.STANDARD_FULL: StandardFullEntry,
    SectionShape.STANDARD_ONE_HEADLINE: OneHeadlineEntry,
    SectionShape.STANDARD_BULLETS_ONLY: BulletsOnlyEntry,
}


def zone_spacing(entry: Entry, zone: str) -> Spacing:
    """Returns the Spacing for a named zone of an entry."""
    if zone not in entry.ZONES:
        raise StructureError(f"{type(entry).__name__} has no '{zone}' spacing zone")
    return getattr(entry, f"{zone}_spacing")


@dataclass(frozen=True)
class Section:
    """
    A titled block of the resume.

    Non-text sections carry one or more entries, all of the type matching
    `shape`. Text sections carry a single Markdown block in `text` instead.
    """
    title: str
    shape: SectionShape
    entries: Tuple[Entry, ...] = ()
    text: str = ""
    title_spacing: Spacing = SECTION_TITLE_SPACING
    content_spacing: Spacing = TEXT_CONTENT_SPACING
    id: str = field(default_factory=new_id, compare=False)

    def __post_init__(self):
        if not isinstance(self.shape, SectionShape):
            object.__setattr__(self, "shape", SectionShape(self.shape))
        if not isinstance(self.entries, tuple):
            object.__setattr__(self, "entries", tuple(self.entries))

        if self.shape is SectionShape.TEXT:
            if self.entries:
                raise StructureError(f"Text section '{self.title}' cannot hold entries")
            return

        if not self.entries:
            raise StructureError(f"Section '{self.title}' needs at least one entry")
        expected = ENTRY_TYPES[self.shape]
        for entry in self.entries:
            if not isinstance(entry, expected):
                raise StructureError(
                    f"Section '{self.title}' is {self.shape.value}, got {type(entry).__name__}"
                )

    def entry_index(self, entry_id: str) -> int:
        for i, entry in enumerate(self.entries):
            if entry.id == entry_id:
                return i
        raise StructureError(f"No entry '{entry_id}' in section '{self.title}'")


@dataclass(frozen=True)
class Resume:
    """The complete document: header fields, page setup and ordered sections."""
    name: str = ""
    title: str = ""
    email: str = ""
    phone: str = ""
    linkedin: str = ""
    github: str = ""
    location: str = ""
    page_margins: float = 1.0
    file_name: str = "Imported_Resume"
    spacing: HeaderSpacing = HeaderSpacing()
    sections: Tuple[Section, ...] = ()

    HEADER_FIELDS: ClassVar[Tuple[str, ...]] = (
        "name", "title", "email", "phone", "linkedin", "github", "location"
    )

    def __post_init__(self):
        if not isinstance(self.sections, tuple):
            object.__setattr__(self, "sections", tuple(self.sections))

    @property
    def contact_fields(self) -> List[str]:
        """Non-empty contact fields in display order."""
        return [f for f in (self.email, self.phone, self.github, self.linkedin, self.location) if f]

    def section_index(self, section_id: str) -> int:
        for i, section in enumerate(self.sections):
            if section.id == section_id:
                return i
        raise StructureError(f"No section '{section_id}'")

    def section(self, section_id: str) -> Section:
        return self.sections[self.section_index(section_id)]


def default_resume() -> Resume:
    """The placeholder resume a new editing session starts from."""
    return Resume(
        name="Your Name",
        title="Professional Title",
        email="your.email@example.com",
        phone="+1 (123) 456-7890",
        linkedin="linkedin.com/in/yourprofile",
        github="github.com/yourusername",
        location="City, ST",
        page_margins=1.0,
        file_name="Your_Name_Resume",
        sections=(
            Section(
                title="EXPERIENCE",
                shape=SectionShape.EXPERIENCE,
                entries=(
                    ExperienceEntry(
                        title="Job Title",
                        company="Company Name",
                        dates="Month Year - Present",
                        location="City, ST",
                        desc=(
                            "- Placeholder bullet point describing a key achievement or responsibility.\n"
                            "- Another placeholder bullet point detailing a specific contribution.\n"
                            "- A third placeholder bullet point to demonstrate impact."
                        ),
                    ),
                ),
            ),
            Section(
                title="PROJECTS",
                shape=SectionShape.STANDARD_ONE_HEADLINE,
                entries=(
                    OneHeadlineEntry(
                        headline_left="Project Name",
                        headline_right="Month Year - Present",
                        desc=(
                            "- Placeholder bullet point describing the project's purpose and your role.\n"
                            "- Another placeholder bullet point explaining the technology used to build it.\n"
                            "- A third placeholder bullet point highlighting the outcome or key features."
                        ),
                    ),
                    OneHeadlineEntry(
                        headline_left="Another Project",
                        headline_right="Month Year - Month Year",
                        desc="- Placeholder bullet point for your second project.",
                        headline1_spacing=Spacing(before=True),
                    ),
                ),
            ),
            Section(
                title="SKILLS",
                shape=SectionShape.STANDARD_BULLETS_ONLY,
                entries=(
                    BulletsOnlyEntry(
                        desc="Placeholder for skills. You can list technologies, languages, or tools here.",
                        desc_spacing=Spacing(before=True, after=False),
                    ),
                ),
            ),
            Section(
                title="EDUCATION",
                shape=SectionShape.EDUCATION,
                entries=(
                    EducationEntry(
                        degree="Degree or Certification",
                        university="Institution Name",
                        dates="Month Year",
                        location="City, ST",
                        desc="— *Optional: Relevant Courses, GPA, or Honors*",
                        desc_spacing=Spacing(before=False, after=False, ultra_tight=True),
                    ),
                ),
            ),
            Section(
                title="VOLUNTEERING",
                shape=SectionShape.STANDARD_ONE_HEADLINE,
                entries=(
                    OneHeadlineEntry(
                        headline_left="Volunteer Role",
                        headline_right="Month Year - Month Year",
                        desc="- Placeholder bullet point describing your volunteer responsibilities and contributions.",
                    ),
                ),
            ),
        ),
    )
