"""Severity highlighting of report prose.

The model returns a ``highlight_map``: phrases lifted from the document, each
with a reason and a red/yellow/green severity. This module finds those phrases
in the patient summary or clinical report and wraps them for display.

Matching is done against the original text only. Every occurrence is recorded
as a ``[start, end)`` span, overlapping candidates are dropped in favour of the
span claimed first (longest phrase, then earliest occurrence), and the text is
rendered once from the spans and the gaps between them. Markup produced for
one phrase is therefore never visible to the matching of another.
"""
import html
import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from core.types import HighlightDirective

# light / dark class pairs; the CSS lives in core.utils.HIGHLIGHT_CSS
SEVERITY_CLASSES = {
    "red": "hl-red",
    "yellow": "hl-yellow",
    "green": "hl-green",
}

# ReportLab has no hover, so the PDF only carries the colour
PDF_BACKGROUNDS = {
    "red": "#fecaca",
    "yellow": "#fef08a",
    "green": "#bbf7d0",
}


@dataclass(frozen=True)
class Span:
    start: int
    end: int
    directive: HighlightDirective


def severity_class(color: str) -> str:
    return SEVERITY_CLASSES.get(color, SEVERITY_CLASSES["yellow"])


def find_spans(text: str, directives: Iterable[HighlightDirective]) -> List[Span]:
    """Return non-overlapping match spans over ``text``, ordered by position.

    Directives are tried longest first; ``sorted`` is stable so equal lengths
    keep the caller's order. Matching is literal and case-insensitive.
    """
    ordered = sorted(directives, key=lambda d: len(d.text), reverse=True)
    claimed: List[Span] = []
    for d in ordered:
        if not d.text:
            continue
        pattern = re.compile(re.escape(d.text), re.IGNORECASE)
        for m in pattern.finditer(text):
            if any(m.start() < s.end and s.start < m.end() for s in claimed):
                continue
            claimed.append(Span(m.start(), m.end(), d))
    return sorted(claimed, key=lambda s: s.start)


def html_span(fragment: str, directive: HighlightDirective) -> str:
    title = html.escape(directive.reason or "", quote=True)
    return f'<span class="hl {severity_class(directive.color)}" title="{title}" tabindex="0">{fragment}</span>'


def pdf_span(fragment: str, directive: HighlightDirective) -> str:
    bg = PDF_BACKGROUNDS.get(directive.color, PDF_BACKGROUNDS["yellow"])
    return f'<font backColor="{bg}"><b>{fragment}</b></font>'


def highlight(
    text: str,
    directives: Optional[Iterable[HighlightDirective]],
    wrap: Callable[[str, HighlightDirective], str] = html_span,
    escape_text: bool = False,
) -> str:
    """Wrap every occurrence of each directive's phrase in ``text``.

    With no directives the text comes back untouched. ``escape_text`` escapes
    body text for an HTML/ReportLab sink; it is applied after matching so
    phrases containing ``&`` or ``<`` still match the raw report.
    """
    directives = list(directives or [])
    esc = (lambda s: html.escape(s, quote=False)) if escape_text else (lambda s: s)
    if not directives:
        return esc(text)

    out: List[str] = []
    pos = 0
    for span in find_spans(text, directives):
        out.append(esc(text[pos:span.start]))
        out.append(wrap(esc(text[span.start:span.end]), span.directive))
        pos = span.end
    out.append(esc(text[pos:]))
    return "".join(out)
