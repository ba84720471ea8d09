
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
Writes a Resume out as Markdown in the layout importer.py reads back.

Spacing and ids are not part of the Markdown format and are lost on export.
"""

import logging
from pathlib import Path

from resume_forge.models import (
    BulletsOnlyEntry,
    EducationEntry,
    ExperienceEntry,
    OneHeadlineEntry,
    Resume,
    Section,
    SectionShape,
    StandardFullEntry,
)

logger = logging.getLogger(__name__)


def _experience(item: ExperienceEntry) -> str:
    return f"**{item.title}** | *{item.company}* | *{item.location}* | **{item.dates}**\n{item.desc}\n\n"


def _education(item: EducationEntry) -> str:
    return f"**{item.degree}** | *{item.university}* | *{item.location}* | **{item.dates}**\n{item.desc}\n\n"


def _standard_full(item: StandardFullEntry) -> str:
    return (
        f"**{item.headline1_left}** | **{item.headline1_right}**\n"
        f"*{item.headline2_left}* | *{item.headline2_right}*\n"
        f"{item.desc}\n\n"
    )


def _one_headline(item: OneHeadlineEntry) -> str:
    return f"**{item.headline_left}** | **{item.headline_right}**\n{item.desc}\n\n"


def _bullets_only(item: BulletsOnlyEntry) -> str:
    return f"{item.desc}\n\n"


ENTRY_TEMPLATES = {
    SectionShape.EXPERIENCE: _experience,
    SectionShape.EDUCATION: _education,
    SectionShape.STANDARD_FULL: _standard_full,
    SectionShape.STANDARD_ONE_HEADLINE: _one_headline,
    SectionShape.STANDARD_BULLETS_ONLY: _bullets_only,
}


def _section(section: Section) -> str:
    md = f"## {section.title}\n"
    if section.shape is SectionShape.TEXT:
        return md + f"{section.text}\n\n"

    template = ENTRY_TEMPLATES[section.shape]
    for item in section.entries:
        md += template(item)
    return md


def to_markdown(resume: Resume) -> str:
    # The importer reads the header by line position, so the title line is
    # written even when empty
    md = f"# {resume.name}\n"
    md += f"### {resume.title}\n"
    md += " | ".join(resume.contact_fields) + "\n\n"

    for section in resume.sections:
        md += _section(section)
    return md


def save_markdown(resume: Resume, output_dir: str) -> Path:
    """Writes <file_name>.md into output_dir and returns its path."""
    path = Path(output_dir) / f"{resume.file_name}.md"
    path.write_text(to_markdown(resume), encoding="utf-8")
    logger.info(f"Markdown exported successfully: {path}")
    return path
