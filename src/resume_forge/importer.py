
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
Heuristic Markdown importer.

Turns a Markdown resume (as written by exporter.py, or by hand in the same
layout) back into a Resume. Markdown carries less structure than the model,
so section shapes are guessed from the first entry of each section and
anything that does not fit is coerced rather than rejected.
"""

import logging
import re
from pathlib import Path
from typing import List, Tuple

from resume_forge.errors import ResumeImportError
from resume_forge.models import (
    BulletsOnlyEntry,
    EducationEntry,
    ExperienceEntry,
    OneHeadlineEntry,
    Resume,
    Section,
    SectionShape,
    Spacing,
)

logger = logging.getLogger(__name__)

SECTION_SPLIT = re.compile(r'^## ', re.MULTILINE)
EMAIL_PATTERN = re.compile(r'[\w.-]+@[\w.-]+')
PHONE_PATTERN = re.compile(r'\+?\d{1,3}?[-.\s]?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}')
MARKDOWN_SUFFIXES = (".md", ".markdown")

# An empty section keeps the spacing the editor gives a blank bullets block
EMPTY_SECTION_SPACING = Spacing(before=True, after=False)


def _parse_header(block: str) -> dict:
    """
    Reads name, title and contact details from the block above the first section.

    The contact line is only mined for things we can recognise: an email,
    a phone number, and '|' separated tokens mentioning github.com,
    linkedin.com or "relocate". Anything else on that line is dropped.
    """
    lines = [line for line in block.split('\n') if line]
    fields = {"name": "", "title": "", "email": "", "phone": "", "github": "", "linkedin": "", "location": ""}

    if len(lines) > 0:
        fields["name"] = lines[0].replace('# ', '', 1).strip()
    if len(lines) > 1:
        fields["title"] = lines[1].replace('### ', '', 1).strip()
    contact_line = lines[2] if len(lines) > 2 else ""

    email = EMAIL_PATTERN.search(contact_line)
    if email:
        fields["email"] = email.group(0)
    phone = PHONE_PATTERN.search(contact_line)
    if phone:
        fields["phone"] = phone.group(0)

    for part in contact_line.split('|'):
        token = part.strip()
        lowered = token.lower()
        if 'github.com' in lowered:
            fields["github"] = token
        elif 'linkedin.com' in lowered:
            fields["linkedin"] = token
        elif 'relocate' in lowered:
            fields["location"] = token

    return fields


def _group_entries(lines: List[str]) -> List[List[str]]:
    """Every line starting with '**' opens a new entry; leading lines join the first."""
    groups = []
    current = []
    for line in lines:
        if line.startswith('**') and current:
            groups.append(current)
            current = []
        current.append(line)
    if current:
        groups.append(current)
    return groups


def _headline_parts(headline: str) -> List[str]:
    return [re.sub(r'\*+', '', part).strip() for part in headline.split('|')]


def classify_shape(parts: List[str], section_title: str) -> SectionShape:
    """Guesses a section's shape from the headline parts of its first entry."""
    title = section_title.upper()
    if len(parts) >= 3 and ('EXPERIENCE' in title or 'EDUCATION' in title):
        return SectionShape.EDUCATION if 'EDUCATION' in title else SectionShape.EXPERIENCE
    if len(parts) == 2:
        return SectionShape.STANDARD_ONE_HEADLINE
    return SectionShape.STANDARD_BULLETS_ONLY


def _part(parts: List[str], index: int) -> str:
    return parts[index] if index < len(parts) else ""


def build_entry(shape: SectionShape, parts: List[str], desc_lines: List[str]):
    """
    Maps headline parts positionally onto the fields of `shape`.

    The shape comes from the section, not from this entry's own part count,
    so a short headline simply leaves the trailing fields empty.
    """
    desc = '\n'.join(desc_lines)
    if shape is SectionShape.EXPERIENCE:
        return ExperienceEntry(
            title=_part(parts, 0), company=_part(parts, 1),
            location=_part(parts, 2), dates=_part(parts, 3), desc=desc,
        )
    if shape is SectionShape.EDUCATION:
        return EducationEntry(
            degree=_part(parts, 0), university=_part(parts, 1),
            location=_part(parts, 2), dates=_part(parts, 3), desc=desc,
        )
    if shape is SectionShape.STANDARD_ONE_HEADLINE:
        return OneHeadlineEntry(headline_left=_part(parts, 0), headline_right=_part(parts, 1), desc=desc)
    if shape is SectionShape.STANDARD_BULLETS_ONLY:
        # No headline in this shape: the whole group is description
        return BulletsOnlyEntry(desc='\n'.join([', '.join(parts)] + desc_lines))
    raise ValueError(f"Importer never produces {shape.value} sections")


def _parse_section(block: str) -> Section:
    lines = [line for line in block.split('\n') if line]
    raw_title = lines.pop(0).strip() if lines else ""
    title = (raw_title or "UNTITLED").upper()

    if not lines:
        return Section(
            title=title,
            shape=SectionShape.STANDARD_BULLETS_ONLY,
            entries=(BulletsOnlyEntry(desc="", desc_spacing=EMPTY_SECTION_SPACING),),
        )

    if title == 'SKILLS' and len(lines) == 1:
        return Section(
            title=title,
            shape=SectionShape.STANDARD_BULLETS_ONLY,
            entries=(BulletsOnlyEntry(desc=lines[0]),),
        )

    shape = None
    entries = []
    for group in _group_entries(lines):
        parts = _headline_parts(group[0])
        if shape is None:
            shape = classify_shape(parts, title)
            logger.debug(f"    > Section '{title}' classified as {shape.value} ({len(parts)} headline parts)")
        entries.append(build_entry(shape, parts, group[1:]))

    return Section(title=title, shape=shape, entries=tuple(entries))


def split_sections(md_content: str) -> Tuple[str, List[str]]:
    """Returns (header_block, section_blocks) or raises ResumeImportError."""
    blocks = SECTION_SPLIT.split(md_content.replace('\r\n', '\n'))
    if len(blocks) < 2:
        raise ResumeImportError(
            "Invalid Markdown format. Could not find any sections (e.g., '## EXPERIENCE')."
        )
    return blocks[0], blocks[1:]


def parse_markdown(md_content: str, file_name: str = "Imported_Resume") -> Resume:
    """
    Converts a Markdown resume into a Resume.

    Args:
        md_content (str): The full Markdown document.
        file_name (str): Output file stem stored on the new resume.

    Returns:
        Resume: A new resume with default spacing everywhere.

    Raises:
        ResumeImportError: If the document has no '## ' section headings.
    """
    header_block, section_blocks = split_sections(md_content)
    header = _parse_header(header_block)
    sections = tuple(_parse_section(block) for block in section_blocks)

    logger.info(f"Imported {len(sections)} section(s) for '{header['name'] or 'unnamed'}'")
    return Resume(page_margins=1.0, file_name=file_name, sections=sections, **header)


def load_markdown_file(path: str) -> Resume:
    """Reads a .md / .markdown file and imports it as '<stem>_imported'."""
    file_path = Path(path)
    if file_path.suffix.lower() not in MARKDOWN_SUFFIXES:
        logger.warning(f"{file_path.name} does not look like a Markdown file. Importing anyway.")

    logger.info(f"Importing resume from: {file_path}")
    content = file_path.read_text(encoding="utf-8")
    return parse_markdown(content, file_name=f"{file_path.stem}_imported")
