
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
Handles the generation of the MS Word (DOCX) version of a resume.
"""

import logging
from pathlib import Path

from docx import Document
from docx.enum.style import WD_STYLE_TYPE
from docx.enum.table import WD_CELL_VERTICAL_ALIGNMENT
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_TAB_ALIGNMENT
from docx.opc.constants import RELATIONSHIP_TYPE
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Inches, Pt, RGBColor

from resume_forge.inline import SpanKind, parse_inline, strip_bullet
from resume_forge.models import Resume, Section, SectionShape, Spacing

logger = logging.getLogger(__name__)

PAGE_WIDTH_IN = 8.5
PAGE_HEIGHT_IN = 11.0

# Paragraph spacing, in twentieths of a point
SPACED_BEFORE = 240
SPACED_AFTER = 120
COMPACT_GAP = 40

HYPERLINK_COLOR = "0000FF"


def twips(value: int) -> Pt:
    return Pt(value / 20)


def apply_spacing(paragraph, spacing: Spacing, is_desc: bool = False):
    """
    Translates a Spacing record into paragraph spacing.

    ultra_tight only applies to description blocks, where it pulls the first
    line up against the header line above it.
    """
    fmt = paragraph.paragraph_format
    if is_desc and spacing.ultra_tight:
        fmt.space_before = twips(0)
        fmt.space_after = twips(0)
        return
    fmt.space_before = twips(SPACED_BEFORE if spacing.before else COMPACT_GAP)
    fmt.space_after = twips(SPACED_AFTER if spacing.after else COMPACT_GAP)


class DocxRenderer:
    """
    Generates a styled DOCX resume from a Resume.
    """
    def __init__(self):
        self.document = None
        self.page_margins = 1.0
        self.styles = {
            'body': 'Normal',
            'bullet': 'List Bullet',
            'hyperlink': 'Hyperlink',
        }

    def _setup_styles(self):
        style = self.document.styles['Normal']
        font = style.font
        font.name = 'Times New Roman'
        font.size = Pt(11)

        if self.styles['hyperlink'] not in self.document.styles:
            link_style = self.document.styles.add_style(self.styles['hyperlink'], WD_STYLE_TYPE.CHARACTER)
            link_style.font.color.rgb = RGBColor.from_string(HYPERLINK_COLOR)
            link_style.font.underline = True

    def _setup_page(self, margins: float):
        section = self.document.sections[0]
        section.page_width = Inches(PAGE_WIDTH_IN)
        section.page_height = Inches(PAGE_HEIGHT_IN)
        section.top_margin = Inches(margins)
        section.bottom_margin = Inches(margins)
        section.left_margin = Inches(margins)
        section.right_margin = Inches(margins)

    def right_tab_position(self) -> Inches:
        """Right edge of the text column, where dates and locations align."""
        return Inches(PAGE_WIDTH_IN - 2 * self.page_margins)

    def _add_hyperlink(self, paragraph, text: str, url: str, bold=False, italic=False, size=None):
        """
        Appends a real w:hyperlink element; python-docx has no public API for it.
        Formatting is applied directly as well as through the Hyperlink style.
        """
        r_id = paragraph.part.relate_to(url, RELATIONSHIP_TYPE.HYPERLINK, is_external=True)

        hyperlink = OxmlElement('w:hyperlink')
        hyperlink.set(qn('r:id'), r_id)

        new_run = OxmlElement('w:r')
        rPr = OxmlElement('w:rPr')

        # rPr children must follow schema order: rStyle, b, i, color, sz, u
        style_id = OxmlElement('w:rStyle')
        style_id.set(qn('w:val'), self.document.styles[self.styles['hyperlink']].style_id)
        rPr.append(style_id)
        if bold:
            rPr.append(OxmlElement('w:b'))
        if italic:
            rPr.append(OxmlElement('w:i'))
        color = OxmlElement('w:color')
        color.set(qn('w:val'), HYPERLINK_COLOR)
        rPr.append(color)
        if size is not None:
            sz = OxmlElement('w:sz')
            sz.set(qn('w:val'), str(int(size.pt * 2)))
            rPr.append(sz)
        underline = OxmlElement('w:u')
        underline.set(qn('w:val'), 'single')
        rPr.append(underline)
        new_run.append(rPr)

        text_elem = OxmlElement('w:t')
        text_elem.set(qn('xml:space'), 'preserve')
        text_elem.text = text
        new_run.append(text_elem)

        hyperlink.append(new_run)
        paragraph._p.append(hyperlink)
        return hyperlink

    def add_runs(self, paragraph, text: str, bold=False, italic=False, size=None):
        """Adds one run per inline span, layering span styling over the base style."""
        for span in parse_inline(text):
            if span.kind is SpanKind.LINK:
                self._add_hyperlink(paragraph, span.text, span.href, bold=bold, italic=italic, size=size)
                continue

            run = paragraph.add_run(span.text)
            if bold or span.kind is SpanKind.BOLD:
                run.bold = True
            if italic or span.kind is SpanKind.ITALIC:
                run.italic = True
            if size is not None:
                run.font.size = size

    def _add_dual_line(self, left: str, right: str, spacing: Spacing, bold=False, italic=False):
        """Left text, a tab, then right text pushed to the right margin."""
        p = self.document.add_paragraph()
        self.add_runs(p, left, bold=bold, italic=italic)
        p.add_run("\t")
        self.add_runs(p, right, bold=bold, italic=italic)
        p.paragraph_format.tab_stops.add_tab_stop(self.right_tab_position(), WD_TAB_ALIGNMENT.RIGHT)
        p.paragraph_format.keep_with_next = True
        apply_spacing(p, spacing)
        return p

    def _add_description(self, desc: str, spacing: Spacing):
        if not desc:
            return
        points = [line for line in desc.split('\n') if line.strip()]
        for i, point in enumerate(points):
            is_bullet, text = strip_bullet(point)
            if is_bullet:
                p = self.document.add_paragraph(style=self.styles['bullet'])
            else:
                p = self.document.add_paragraph()
            self.add_runs(p, text)
            p.paragraph_format.widow_control = True

            if i == 0:
                apply_spacing(p, spacing, is_desc=True)
            else:
                p.paragraph_format.space_before = twips(0)
                p.paragraph_format.space_after = twips(0)

    def _add_section_title(self, section: Section):
        """
        Section titles sit in a one-cell, full-width table whose bottom border
        draws the rule under the heading.
        """
        table = self.document.add_table(rows=1, cols=1)

        tblW = table._tbl.tblPr.find(qn('w:tblW'))
        if tblW is None:
            tblW = OxmlElement('w:tblW')
            table._tbl.tblPr.append(tblW)
        tblW.set(qn('w:type'), 'pct')
        tblW.set(qn('w:w'), '5000')

        cell = table.cell(0, 0)
        tcPr = cell._tc.get_or_add_tcPr()

        borders = OxmlElement('w:tcBorders')
        bottom = OxmlElement('w:bottom')
        bottom.set(qn('w:val'), 'single')
        bottom.set(qn('w:sz'), '12')
        bottom.set(qn('w:space'), '0')
        bottom.set(qn('w:color'), '000000')
        borders.append(bottom)
        tcPr.append(borders)

        margins = OxmlElement('w:tcMar')
        for side in ('top', 'left', 'bottom', 'right'):
            node = OxmlElement(f'w:{side}')
            node.set(qn('w:w'), '0')
            node.set(qn('w:type'), 'dxa')
            margins.append(node)
        tcPr.append(margins)

        cell.vertical_alignment = WD_CELL_VERTICAL_ALIGNMENT.CENTER

        p = cell.paragraphs[0]
        self.add_runs(p, section.title.upper(), bold=True, size=Pt(12))
        p.paragraph_format.keep_with_next = True
        apply_spacing(p, section.title_spacing)
        return table

    # --- ENTRY LAYOUTS (one per section shape) ---

    def _experience(self, item):
        self._add_dual_line(item.title, item.dates, item.header_spacing, bold=True)
        self._add_dual_line(item.company, item.location, item.subheader_spacing, italic=True)
        self._add_description(item.desc, item.desc_spacing)

    def _education(self, item):
        self._add_dual_line(item.degree, item.dates, item.header_spacing, bold=True)
        self._add_dual_line(item.university, item.location, item.subheader_spacing, italic=True)
        self._add_description(item.desc, item.desc_spacing)

    def _standard_full(self, item):
        self._add_dual_line(item.headline1_left, item.headline1_right, item.headline1_spacing, bold=True)
        self._add_dual_line(item.headline2_left, item.headline2_right, item.headline2_spacing, italic=True)
        self._add_description(item.desc, item.desc_spacing)

    def _one_headline(self, item):
        self._add_dual_line(item.headline_left, item.headline_right, item.headline1_spacing, bold=True)
        self._add_description(item.desc, item.desc_spacing)

    def _bullets_only(self, item):
        self._add_description(item.desc, item.desc_spacing)

    ENTRY_LAYOUTS = {
        SectionShape.EXPERIENCE: '_experience',
        SectionShape.EDUCATION: '_education',
        SectionShape.STANDARD_FULL: '_standard_full',
        SectionShape.STANDARD_ONE_HEADLINE: '_one_headline',
        SectionShape.STANDARD_BULLETS_ONLY: '_bullets_only',
    }

    def _add_header(self, resume: Resume):
        p = self.document.add_paragraph()
        self.add_runs(p, resume.name, size=Pt(24))
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER
        apply_spacing(p, resume.spacing.name)

        if resume.title:
            p = self.document.add_paragraph()
            self.add_runs(p, resume.title, size=Pt(14))
            p.alignment = WD_ALIGN_PARAGRAPH.CENTER
            apply_spacing(p, resume.spacing.title)

        p = self.document.add_paragraph()
        fields = resume.contact_fields
        for index, value in enumerate(fields):
            self.add_runs(p, value, size=Pt(10))
            if index < len(fields) - 1:
                p.add_run(" | ").font.size = Pt(10)
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER
        apply_spacing(p, resume.spacing.contact)

    def render(self, resume: Resume):
        """
        Builds the DOCX document in memory.

        Args:
            resume (Resume): The resume to render.

        Returns:
            docx.document.Document: The populated document (not yet saved).
        """
        self.document = Document()
        self.page_margins = resume.page_margins
        self._setup_styles()
        self._setup_page(resume.page_margins)

        self._add_header(resume)

        for section in resume.sections:
            self._add_section_title(section)
            if section.shape is SectionShape.TEXT:
                self._add_description(section.text, section.content_spacing)
                continue

            layout = getattr(self, self.ENTRY_LAYOUTS[section.shape])
            for item in section.entries:
                layout(item)

        return self.document

    def generate(self, resume: Resume, output_filename: str):
        """
        Renders and saves the document.

        Args:
            resume (Resume): The resume to render.
            output_filename (str): The path to save the generated DOCX.
        """
        document = self.render(resume)
        document.save(output_filename)
        logger.info(f"DOCX generated successfully: {output_filename}")
        return output_filename


def save_docx(resume: Resume, output_dir: str) -> Path:
    path = Path(output_dir) / f"{resume.file_name}.docx"
    DocxRenderer().generate(resume, str(path))
    return path
