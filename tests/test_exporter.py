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

import shutil
import tempfile
import unittest
from dataclasses import replace
from pathlib import Path

from resume_forge.exporter import ENTRY_TEMPLATES, save_markdown, to_markdown
from resume_forge.importer import parse_markdown
from resume_forge.models import (
    ENTRY_TYPES,
    BulletsOnlyEntry,
    EducationEntry,
    ExperienceEntry,
    OneHeadlineEntry,
    Resume,
    Section,
    SectionShape,
    Spacing,
    StandardFullEntry,
    default_resume,
)

SAMPLE_MD = """# Jane Doe
### Backend Engineer
jane@example.com | +1 555-123-4567 | github.com/jane | linkedin.com/in/jane | Open to relocate

## EXPERIENCE
**Senior Engineer** | *Acme* | *Remote* | **Jan 2020 - Present**
- Built things
- Shipped things

## PROJECTS
**Tool** | **2021**
- Wrote a tool

## SKILLS
Python, Go, Rust

## EDUCATION
**BSc Computer Science** | *State University* | *Springfield* | **2016**

## AWARDS
"""


class TestToMarkdown(unittest.TestCase):
    def test_header_lines(self):
        md = to_markdown(default_resume())
        lines = md.split("\n")
        self.assertEqual(lines[0], "# Your Name")
        self.assertEqual(lines[1], "### Professional Title")
        self.assertEqual(
            lines[2],
            "your.email@example.com | +1 (123) 456-7890 | github.com/yourusername"
            " | linkedin.com/in/yourprofile | City, ST",
        )
        self.assertEqual(lines[3], "")

    def test_empty_title_keeps_its_line(self):
        md = to_markdown(Resume(name="Jane", email="j@x.io"))
        self.assertEqual(md, "# Jane\n### \nj@x.io\n\n")

    def test_experience_entry(self):
        md = to_markdown(default_resume())
        self.assertIn(
            "## EXPERIENCE\n**Job Title** | *Company Name* | *City, ST* | **Month Year - Present**\n- Placeholder",
            md,
        )

    def test_standard_full_entry(self):
        section = Section(title="TALKS", shape=SectionShape.STANDARD_FULL, entries=(
            StandardFullEntry(headline1_left="PyCon", headline1_right="2024",
                              headline2_left="Keynote", headline2_right="Pittsburgh", desc="- Spoke"),
        ))
        md = to_markdown(Resume(name="Jane", sections=(section,)))
        self.assertIn("## TALKS\n**PyCon** | **2024**\n*Keynote* | *Pittsburgh*\n- Spoke\n\n", md)

    def test_text_section_exports_raw_text(self):
        section = Section(title="SUMMARY", shape=SectionShape.TEXT, text="Engineer who *ships*.")
        md = to_markdown(Resume(name="Jane", sections=(section,)))
        self.assertTrue(md.endswith("## SUMMARY\nEngineer who *ships*.\n\n"))

    def test_every_entry_shape_has_a_template(self):
        self.assertEqual(set(ENTRY_TEMPLATES), set(ENTRY_TYPES))


def _content(resume: Resume):
    """Header fields plus section titles, shapes and entry text; no spacing or ids."""
    header = tuple(getattr(resume, f) for f in Resume.HEADER_FIELDS)
    sections = [
        (s.title, s.shape, s.text, [tuple(getattr(e, f) for f in e.TEXT_FIELDS) for e in s.entries])
        for s in resume.sections
    ]
    return header, sections


PROJECTS = Section(title="PROJECTS", shape=SectionShape.STANDARD_ONE_HEADLINE, entries=(
    OneHeadlineEntry(headline_left="Tool", headline_right="2021", desc="- Wrote a tool"),
    OneHeadlineEntry(headline_left="Site", headline_right="2019", desc="- Built a site\n- Ran it"),
))


class TestRoundTrip(unittest.TestCase):
    def assertRoundTrips(self, resume: Resume):
        self.assertEqual(_content(parse_markdown(to_markdown(resume))), _content(resume))

    def test_imported_resume_survives_export(self):
        first = parse_markdown(SAMPLE_MD)
        second = parse_markdown(to_markdown(first))
        self.assertEqual(second, first)

    def test_full_header_and_two_part_section(self):
        self.assertRoundTrips(Resume(
            name="Jane Doe", title="Backend Engineer", email="jane@example.com",
            phone="+1 555-123-4567", github="github.com/jane", linkedin="linkedin.com/in/jane",
            location="Open to relocate", sections=(PROJECTS,),
        ))

    def test_empty_title(self):
        self.assertRoundTrips(Resume(name="Jane", title="", email="jane@example.com", sections=(PROJECTS,)))

    def test_no_contact_fields(self):
        self.assertRoundTrips(Resume(name="Jane", title="Engineer", sections=(PROJECTS,)))
        self.assertRoundTrips(Resume(name="Jane", sections=(PROJECTS,)))

    def test_bullets_only_section(self):
        tools = Section(title="TOOLS", shape=SectionShape.STANDARD_BULLETS_ONLY, entries=(
            BulletsOnlyEntry(desc="- Python\n- Go"),
        ))
        self.assertRoundTrips(Resume(name="Jane", title="Engineer", sections=(tools,)))

    def test_experience_and_education_sections(self):
        experience = Section(title="EXPERIENCE", shape=SectionShape.EXPERIENCE, entries=(
            ExperienceEntry(title="Senior Engineer", company="Acme", location="Remote",
                            dates="Jan 2020 - Present", desc="- Built things"),
            ExperienceEntry(title="Engineer", company="Beta", location="NYC", dates="2017 - 2019", desc=""),
        ))
        education = Section(title="EDUCATION", shape=SectionShape.EDUCATION, entries=(
            EducationEntry(degree="BSc Computer Science", university="State University",
                           location="Springfield", dates="2016", desc="- Honours"),
        ))
        self.assertRoundTrips(Resume(name="Jane", title="Engineer", sections=(experience, education)))

    def test_spacing_is_not_carried(self):
        tight = replace(PROJECTS, title_spacing=Spacing(after=True))
        back = parse_markdown(to_markdown(Resume(name="Jane", sections=(tight,))))
        self.assertEqual(back.sections[0].title_spacing, PROJECTS.title_spacing)

    def test_several_bullet_entries_merge(self):
        # Entries only start at '**' headlines, so headline-less entries fold into one
        tools = Section(title="TOOLS", shape=SectionShape.STANDARD_BULLETS_ONLY, entries=(
            BulletsOnlyEntry(desc="- Python"),
            BulletsOnlyEntry(desc="- Go"),
        ))
        back = parse_markdown(to_markdown(Resume(name="Jane", sections=(tools,))))
        self.assertEqual([e.desc for e in back.sections[0].entries], ["- Python\n- Go"])


class TestSaveMarkdown(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_writes_file_named_after_resume(self):
        resume = default_resume()
        path = save_markdown(resume, self.test_dir)
        self.assertEqual(path, Path(self.test_dir) / "Your_Name_Resume.md")
        self.assertEqual(path.read_text(encoding="utf-8"), to_markdown(resume))


if __name__ == '__main__':
    unittest.main()
