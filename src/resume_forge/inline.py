
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
Inline Markdown subset used inside every free-text field.

Only links, bold and italic are recognised, without nesting:
    [label](url)   link (label is not scanned for emphasis)
    **text**       bold
    *text*         italic
"""

import re
from dataclasses import dataclass
from enum import Enum
from html import escape
from typing import List, Optional

LINK_SPLIT = re.compile(r'(\[.*?\]\(.*?\))')
LINK_PARTS = re.compile(r'\[(.*?)\]\((.*?)\)')
EMPHASIS_SPLIT = re.compile(r'(\*\*.*?\*\*|\*.*?\*)')


class SpanKind(str, Enum):
    PLAIN = "plain"
    BOLD = "bold"
    ITALIC = "italic"
    LINK = "link"


@dataclass(frozen=True)
class Span:
    kind: SpanKind
    text: str
    href: Optional[str] = None


def _parse_emphasis(token: str) -> List[Span]:
    spans = []
    for piece in EMPHASIS_SPLIT.split(token):
        if not piece:
            continue
        if len(piece) >= 4 and piece.startswith('**') and piece.endswith('**'):
            spans.append(Span(SpanKind.BOLD, piece[2:-2]))
        elif len(piece) >= 2 and piece.startswith('*') and piece.endswith('*'):
            spans.append(Span(SpanKind.ITALIC, piece[1:-1]))
        else:
            spans.append(Span(SpanKind.PLAIN, piece))
    return spans


def parse_inline(text: str) -> List[Span]:
    """
    Splits a field into typed spans, leftmost match first.

    Args:
        text (str): Raw field content (may be empty or None).

    Returns:
        List[Span]: At least one span; empty input gives one empty plain span.
    """
    if not text:
        return [Span(SpanKind.PLAIN, "")]

    spans = []
    # re.split with one capture group puts the links at odd indices
    for i, token in enumerate(LINK_SPLIT.split(text)):
        if not token:
            continue
        if i % 2:
            m = LINK_PARTS.fullmatch(token)
            spans.append(Span(SpanKind.LINK, m.group(1), href=m.group(2)))
        else:
            spans.extend(_parse_emphasis(token))

    return spans or [Span(SpanKind.PLAIN, "")]


def span_to_html(span: Span) -> str:
    text = escape(span.text, quote=False)
    if span.kind is SpanKind.BOLD:
        return f"<strong>{text}</strong>"
    if span.kind is SpanKind.ITALIC:
        return f"<em>{text}</em>"
    if span.kind is SpanKind.LINK:
        return f'<a href="{escape(span.href or "")}">{text}</a>'
    return text


def inline_html(text: str) -> str:
    """Renders a field as inline HTML with no block-level wrapper."""
    return "".join(span_to_html(s) for s in parse_inline(text)).strip()


def strip_bullet(line: str) -> tuple[bool, str]:
    """Returns (is_bullet, text) for one description line."""
    stripped = line.strip()
    if stripped.startswith('-'):
        return True, stripped[1:].strip()
    return False, stripped
