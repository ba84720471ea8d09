
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
Renders a Resume as a standalone HTML page.

The same markup drives the live preview and is what gets sent to the PDF
service, so it must not depend on anything but the Resume itself.
"""

import logging
from pathlib import Path
from typing import List

import markdown

from resume_forge.inline import inline_html, strip_bullet
from resume_forge.models import (
    BulletsOnlyEntry,
    EducationEntry,
    ExperienceEntry,
    OneHeadlineEntry,
    Resume,
    Section,
    SectionShape,
    Spacing,
    StandardFullEntry,
)

logger = logging.getLogger(__name__)

STATIC_CSS = """
body {
  font-family: 'Times New Roman', serif;
  background-color: #FFFFFF;
  color: #000000;
  font-size: 11pt;
  line-height: 1.3;
  margin: 0;
  padding: 0;
  width: 100%;
  box-sizing: border-box;
}
.container {
  width: 8.5in;
  min-height: 11in;
  margin: 0;
  padding: 0;
  background-color: #FFFFFF;
  box-sizing: border-box;
}
h1 {
  text-align: center;
  font-size: 24pt;
  font-weight: bold;
  margin: 0;
  padding: 0 0 2px 0;
}
.professional-title {
  text-align: center;
  font-size: 14pt;
  margin: 0;
  padding: 0 0 2px 0;
}
.contact-info {
  text-align: center;
  font-size: 10pt;
  margin: 0;
  padding: 0 0 2px 0;
  white-space: nowrap;
}
.section-title {
  border-bottom: 1.5px solid #000000;
  padding-bottom: 2px;
  font-size: 12pt;
  font-weight: bold;
  text-transform: uppercase;
  margin: 0;
}
.item-header {
  display: flex;
  justify-content: space-between;
  font-weight: bold;
  font-size: 11pt;
  margin: 0;
  padding: 0;
}
.item-subheader {
  display: flex;
  justify-content: space-between;
  font-style: italic;
  font-size: 11pt;
  margin: 0;
  padding: 0;
}
.item-desc { margin: 0; padding: 0; }
.item-desc ul { padding-left: 18px; list-style-position: outside; margin: 0; }
li { margin: 0; padding: 0; }
p { margin: 0; padding: 0; }
.space-before { margin-top: 12px; }
.space-after { margin-bottom: 4px; }
.compact-before { margin-top: 2px; }
.compact-after { margin-bottom: 2px; }
.ultra-tight { margin-top: -2px; margin-bottom: 0px; }
.ultra-tight ul { margin-top: 2px; }
"""


def spacing_classes(spacing: Spacing, is_desc: bool = False) -> str:
    """Maps a Spacing record onto the CSS classes above."""
    if is_desc and spacing.ultra_tight:
        return "ultra-tight"
    before = "space-before" if spacing.before else "compact-before"
    after = "space-after" if spacing.after else "compact-after"
    return f"{before} {after}"


def description_html(desc: str) -> str:
    """
    Bullet lines ('- ...') become <ul> lists, runs of other lines become
    paragraphs. Blank lines only separate paragraphs.
    """
    blocks: List[str] = []
    bullets: List[str] = []
    paragraph: List[str] = []

    def flush_bullets():
        if bullets:
            items = "".join(f"<li>{b}</li>" for b in bullets)
            blocks.append(f"<ul>{items}</ul>")
            bullets.clear()

    def flush_paragraph():
        if paragraph:
            blocks.append(f"<p>{' '.join(paragraph)}</p>")
            paragraph.clear()

    for line in (desc or "").split('\n'):
        if not line.strip():
            flush_bullets()
            flush_paragraph()
            continue
        is_bullet, text = strip_bullet(line)
        if is_bullet:
            flush_paragraph()
            bullets.append(inline_html(text))
        else:
            flush_bullets()
            paragraph.append(inline_html(text))

    flush_bullets()
    flush_paragraph()
    return "".join(blocks)


def _dual_line(css_class: str, spacing: Spacing, left: str, right: str) -> str:
    return (
        f'<div class="{css_class} {spacing_classes(spacing)}">'
        f'<span>{inline_html(left)}</span><span>{inline_html(right)}</span></div>'
    )


def _desc(desc: str, spacing: Spacing) -> str:
    return f'<div class="item-desc {spacing_classes(spacing, True)}">{description_html(desc)}</div>'


def _experience(item: ExperienceEntry) -> str:
    return (
        _dual_line("item-header", item.header_spacing, item.title, item.dates)
        + _dual_line("item-subheader", item.subheader_spacing, item.company, item.location)
        + _desc(item.desc, item.desc_spacing)
    )


def _education(item: EducationEntry) -> str:
    return (
        _dual_line("item-header", item.header_spacing, item.degree, item.dates)
        + _dual_line("item-subheader", item.subheader_spacing, item.university, item.location)
        + _desc(item.desc, item.desc_spacing)
    )


def _standard_full(item: StandardFullEntry) -> str:
    return (
        _dual_line("item-header", item.headline1_spacing, item.headline1_left, item.headline1_right)
        + _dual_line("item-subheader", item.headline2_spacing, item.headline2_left, item.headline2_right)
        + _desc(item.desc, item.desc_spacing)
    )


def _one_headline(item: OneHeadlineEntry) -> str:
    return (
        _dual_line("item-header", item.headline1_spacing, item.headline_left, item.headline_right)
        + _desc(item.desc, item.desc_spacing)
    )


def _bullets_only(item: BulletsOnlyEntry) -> str:
    return _desc(item.desc, item.desc_spacing)


ENTRY_RENDERERS = {
    SectionShape.EXPERIENCE: _experience,
    SectionShape.EDUCATION: _education,
    SectionShape.STANDARD_FULL: _standard_full,
    SectionShape.STANDARD_ONE_HEADLINE: _one_headline,
    SectionShape.STANDARD_BULLETS_ONLY: _bullets_only,
}


def _section(section: Section) -> str:
    html = (
        f'<div class="section-title {spacing_classes(section.title_spacing)}">'
        f'{inline_html(section.title.upper())}</div>'
    )
    if section.shape is SectionShape.TEXT:
        body = markdown.markdown(section.text or "")
        return html + f'<div class="{spacing_classes(section.content_spacing)}">{body}</div>'

    render_entry = ENTRY_RENDERERS[section.shape]
    return html + "".join(render_entry(item) for item in section.entries)


def render_html(resume: Resume) -> str:
    """
    Builds the full HTML document (with embedded CSS) for a resume.

    Args:
        resume (Resume): The resume to render.

    Returns:
        str: A complete <html> document.
    """
    container_style = f"padding: {resume.page_margins}in;"
    contact_info = " | ".join(inline_html(f) for f in resume.contact_fields)

    html = f'<html><head><meta charset="utf-8"><style>{STATIC_CSS}</style></head><body>'
    html += f'<div class="container" style="{container_style}">'
    html += f'<h1 class="{spacing_classes(resume.spacing.name)}">{inline_html(resume.name)}</h1>'
    if resume.title:
        html += (
            f'<div class="professional-title {spacing_classes(resume.spacing.title)}">'
            f'{inline_html(resume.title)}</div>'
        )
    html += f'<div class="contact-info {spacing_classes(resume.spacing.contact)}">{contact_info}</div>'

    for section in resume.sections:
        html += _section(section)

    html += '</div></body></html>'
    return html


def save_html(resume: Resume, output_dir: str) -> Path:
    path = Path(output_dir) / f"{resume.file_name}.html"
    path.write_text(render_html(resume), encoding="utf-8")
    logger.info(f"HTML preview written: {path}")
    return path
