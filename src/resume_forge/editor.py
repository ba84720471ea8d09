
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
Editing operations on a Resume.

ResumeEditor is the single writer. Each operation builds a new Resume with
only the touched section/entry replaced and then swaps it in, so anyone
holding `editor.resume` (e.g. a preview render) keeps a consistent snapshot.
"""

import logging
import re
from dataclasses import replace
from datetime import datetime
from typing import Callable, Tuple

from resume_forge.errors import StructureError
from resume_forge.importer import load_markdown_file, parse_markdown
from resume_forge.models import (
    DESC_LOOSE,
    BulletsOnlyEntry,
    EducationEntry,
    ExperienceEntry,
    HeaderSpacing,
    OneHeadlineEntry,
    Resume,
    Section,
    SectionShape,
    Spacing,
    StandardFullEntry,
    default_resume,
    zone_spacing,
)

logger = logging.getLogger(__name__)

YEAR_PATTERN = re.compile(r'\b(19\d{2}|20\d{2})\b')
MONTH_PATTERN = re.compile(r'\b(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)\w*\b', re.IGNORECASE)
MONTHS = {m: i for i, m in enumerate(
    ('jan', 'feb', 'mar', 'apr', 'may', 'jun', 'jul', 'aug', 'sep', 'oct', 'nov', 'dec'), start=1)}

NEW_ENTRY_HEADER = Spacing(before=True, after=False)
DIRECTIONS = ("up", "down")


def placeholder_entry(shape: SectionShape):
    """A fresh entry with placeholder text, as offered by 'Add Entry'."""
    if shape is SectionShape.EXPERIENCE:
        return ExperienceEntry(
            title="New Job Title", company="Company", dates="Date Range", location="Location",
            desc="- New description.", header_spacing=NEW_ENTRY_HEADER,
        )
    if shape is SectionShape.EDUCATION:
        return EducationEntry(
            degree="New Degree", university="University", dates="Date", location="Location",
            desc="", header_spacing=NEW_ENTRY_HEADER,
        )
    if shape is SectionShape.STANDARD_FULL:
        return StandardFullEntry(
            headline1_left="New Headline 1", headline1_right="Date",
            headline2_left="New Headline 2", headline2_right="Location",
            desc="- New description.", headline1_spacing=NEW_ENTRY_HEADER,
        )
    if shape is SectionShape.STANDARD_ONE_HEADLINE:
        return OneHeadlineEntry(
            headline_left="New Headline", headline_right="Date",
            desc="- New description.", headline1_spacing=NEW_ENTRY_HEADER,
        )
    if shape is SectionShape.STANDARD_BULLETS_ONLY:
        return BulletsOnlyEntry(desc="- New bullet point.", desc_spacing=DESC_LOOSE)
    raise StructureError(f"{shape.value} sections have no entries")


def placeholder_section(shape: SectionShape) -> Section:
    shape = SectionShape(shape)
    if shape is SectionShape.TEXT:
        return Section(title="New Section", shape=shape, text="New text block. You can edit this summary.")

    titles = {SectionShape.EXPERIENCE: "EXPERIENCE", SectionShape.EDUCATION: "EDUCATION"}
    return Section(title=titles.get(shape, "New Section"), shape=shape, entries=(placeholder_entry(shape),))


def sortable_date(entry) -> Tuple[int, int]:
    """
    Sort key (year, month) from the entry's date field.

    "Present" sorts after every real date; entries without a recognisable
    year get (0, 0).
    """
    if isinstance(entry, (ExperienceEntry, EducationEntry)):
        date_str = entry.dates
    elif isinstance(entry, StandardFullEntry):
        date_str = entry.headline1_right
    elif isinstance(entry, OneHeadlineEntry):
        date_str = entry.headline_right
    else:
        date_str = ""

    if not date_str:
        return (0, 0)
    if 'present' in date_str.lower():
        return (datetime.now().year + 100, 12)

    years = [int(y) for y in YEAR_PATTERN.findall(date_str)]
    if not years:
        return (0, 0)
    months = [MONTHS[m.lower()[:3]] for m in MONTH_PATTERN.findall(date_str)]
    return (max(years), max(months) if months else 12)


def _swap(items: tuple, index: int, direction: str) -> tuple:
    if direction not in DIRECTIONS:
        raise ValueError(f"direction must be one of {DIRECTIONS}, got '{direction}'")
    target = index - 1 if direction == "up" else index + 1
    if target < 0 or target >= len(items):
        return items
    items = list(items)
    items[index], items[target] = items[target], items[index]
    return tuple(items)


class ResumeEditor:
    """
    Holds the current Resume and applies edits to it.
    """
    def __init__(self, resume: Resume = None):
        self._resume = resume if resume is not None else default_resume()

    @property
    def resume(self) -> Resume:
        return self._resume

    # --- internal helpers ---

    def _set(self, resume: Resume) -> Resume:
        self._resume = resume
        return resume

    def _update_section(self, section_id: str, change: Callable[[Section], Section]) -> Resume:
        index = self._resume.section_index(section_id)
        sections = list(self._resume.sections)
        sections[index] = change(sections[index])
        return self._set(replace(self._resume, sections=tuple(sections)))

    def _update_entry(self, section_id: str, entry_id: str, change) -> Resume:
        def update(section: Section) -> Section:
            index = section.entry_index(entry_id)
            entries = list(section.entries)
            entries[index] = change(entries[index])
            return replace(section, entries=tuple(entries))
        return self._update_section(section_id, update)

    def _entry_sections_only(self, section_id: str) -> Section:
        section = self._resume.section(section_id)
        if section.shape is SectionShape.TEXT:
            raise StructureError(f"Text section '{section.title}' has no entries")
        return section

    # --- header and page ---

    def update_field(self, field_name: str, value) -> Resume:
        """Sets a header field, 'page_margins' or 'file_name'."""
        if field_name == "page_margins":
            value = float(value)
            if value <= 0:
                raise StructureError("page_margins must be positive")
        elif field_name not in Resume.HEADER_FIELDS and field_name != "file_name":
            raise StructureError(f"Unknown resume field '{field_name}'")
        return self._set(replace(self._resume, **{field_name: value}))

    def _update_header_zone(self, zone: str, change: Callable[[Spacing], Spacing]) -> Resume:
        if zone not in HeaderSpacing.ZONES:
            raise StructureError(f"Unknown header zone '{zone}'")
        spacing = self._resume.spacing
        new_spacing = replace(spacing, **{zone: change(getattr(spacing, zone))})
        return self._set(replace(self._resume, spacing=new_spacing))

    def set_header_spacing_before(self, zone: str, value: bool) -> Resume:
        return self._update_header_zone(zone, lambda s: s.with_before(value))

    def set_header_spacing_after(self, zone: str, value: bool) -> Resume:
        return self._update_header_zone(zone, lambda s: s.with_after(value))

    def clear_header_spacing(self) -> Resume:
        """Removes all spacing around name, title and contact lines."""
        return self._set(replace(self._resume, spacing=HeaderSpacing(
            name=Spacing(), title=Spacing(), contact=Spacing(),
        )))

    # --- sections ---

    def add_section(self, shape) -> Section:
        section = placeholder_section(shape)
        self._set(replace(self._resume, sections=self._resume.sections + (section,)))
        logger.debug(f"    > Added {section.shape.value} section '{section.title}'")
        return section

    def remove_section(self, section_id: str) -> Resume:
        index = self._resume.section_index(section_id)
        sections = self._resume.sections[:index] + self._resume.sections[index + 1:]
        return self._set(replace(self._resume, sections=sections))

    def move_section(self, section_id: str, direction: str) -> Resume:
        index = self._resume.section_index(section_id)
        return self._set(replace(self._resume, sections=_swap(self._resume.sections, index, direction)))

    def update_section_title(self, section_id: str, title: str) -> Resume:
        return self._update_section(section_id, lambda s: replace(s, title=title))

    def _text_section_only(self, section_id: str) -> Section:
        section = self._resume.section(section_id)
        if section.shape is not SectionShape.TEXT:
            raise StructureError(f"Section '{section.title}' is not a text section")
        return section

    def update_text(self, section_id: str, text: str) -> Resume:
        self._text_section_only(section_id)
        return self._update_section(section_id, lambda s: replace(s, text=text))

    def set_title_spacing_before(self, section_id: str, value: bool) -> Resume:
        return self._update_section(section_id, lambda s: replace(s, title_spacing=s.title_spacing.with_before(value)))

    def set_title_spacing_after(self, section_id: str, value: bool) -> Resume:
        return self._update_section(section_id, lambda s: replace(s, title_spacing=s.title_spacing.with_after(value)))

    def set_content_spacing_before(self, section_id: str, value: bool) -> Resume:
        self._text_section_only(section_id)
        return self._update_section(section_id, lambda s: replace(s, content_spacing=s.content_spacing.with_before(value)))

    def set_content_spacing_after(self, section_id: str, value: bool) -> Resume:
        self._text_section_only(section_id)
        return self._update_section(section_id, lambda s: replace(s, content_spacing=s.content_spacing.with_after(value)))

    # --- entries ---

    def add_entry(self, section_id: str):
        section = self._entry_sections_only(section_id)
        entry = placeholder_entry(section.shape)
        self._update_section(section_id, lambda s: replace(s, entries=s.entries + (entry,)))
        return entry

    def remove_last_entry(self, section_id: str) -> Resume:
        section = self._entry_sections_only(section_id)
        if len(section.entries) <= 1:
            raise StructureError(f"Section '{section.title}' must keep at least one entry")
        return self._update_section(section_id, lambda s: replace(s, entries=s.entries[:-1]))

    def remove_entry(self, section_id: str, entry_id: str) -> Resume:
        section = self._entry_sections_only(section_id)
        index = section.entry_index(entry_id)
        if len(section.entries) <= 1:
            raise StructureError(f"Section '{section.title}' must keep at least one entry")
        return self._update_section(
            section_id, lambda s: replace(s, entries=s.entries[:index] + s.entries[index + 1:])
        )

    def move_entry(self, section_id: str, entry_id: str, direction: str) -> Resume:
        section = self._entry_sections_only(section_id)
        index = section.entry_index(entry_id)
        return self._update_section(
            section_id, lambda s: replace(s, entries=_swap(s.entries, index, direction))
        )

    def update_entry(self, section_id: str, entry_id: str, field_name: str, value: str) -> Resume:
        def change(entry):
            if field_name not in entry.TEXT_FIELDS:
                raise StructureError(f"{type(entry).__name__} has no field '{field_name}'")
            return replace(entry, **{field_name: value})
        return self._update_entry(section_id, entry_id, change)

    def sort_entries(self, section_id: str) -> Resume:
        """Orders entries newest first; ties keep their current order."""
        self._entry_sections_only(section_id)
        return self._update_section(
            section_id, lambda s: replace(s, entries=tuple(sorted(s.entries, key=sortable_date, reverse=True)))
        )

    def _update_entry_zone(self, section_id, entry_id, zone, change) -> Resume:
        def update(entry):
            current = zone_spacing(entry, zone)
            return replace(entry, **{f"{zone}_spacing": change(current)})
        return self._update_entry(section_id, entry_id, update)

    def set_entry_spacing_before(self, section_id: str, entry_id: str, zone: str, value: bool) -> Resume:
        return self._update_entry_zone(section_id, entry_id, zone, lambda s: s.with_before(value))

    def set_entry_spacing_after(self, section_id: str, entry_id: str, zone: str, value: bool) -> Resume:
        return self._update_entry_zone(section_id, entry_id, zone, lambda s: s.with_after(value))

    def set_entry_ultra_tight(self, section_id: str, entry_id: str, value: bool) -> Resume:
        return self._update_entry_zone(section_id, entry_id, "desc", lambda s: s.with_ultra_tight(value))

    # --- import ---

    def import_markdown(self, md_content: str, file_name: str = "Imported_Resume") -> Resume:
        """
        Replaces the whole resume with an imported one.

        Raises ResumeImportError before touching the current resume if the
        Markdown has no sections.
        """
        return self._set(parse_markdown(md_content, file_name=file_name))

    def import_file(self, path: str) -> Resume:
        return self._set(load_markdown_file(path))
