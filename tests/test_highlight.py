import pytest

from core.highlight import find_spans, highlight, pdf_span, severity_class
from core.types import HighlightDirective as D


def span(fragment, color="yellow", reason=""):
    return f'<span class="hl hl-{color}" title="{reason}" tabindex="0">{fragment}</span>'


def test_no_directives_returns_text_unchanged():
    text = "Fasting glucose <b> & 110 *mg*"
    assert highlight(text, []) == text
    assert highlight(text, None) == text


def test_end_to_end_single_marker():
    text = "Your fasting glucose is 110 mg/dL, above the 70-100 range."
    out = highlight(text, [D("110 mg/dL", "above reference range", "red")])
    assert out == (
        "Your fasting glucose is "
        + span("110 mg/dL", "red", "above reference range")
        + ", above the 70-100 range."
    )
    assert out.count("<span") == 1


def test_longer_phrase_wins_over_nested_shorter():
    out = highlight("fasting glucose: 110", [D("glucose", "", "yellow"), D("fasting glucose", "", "red")])
    assert out == span("fasting glucose", "red") + ": 110"
    assert "hl-yellow" not in out


def test_partial_overlap_keeps_longer_span():
    out = highlight("blood pressure reading", [D("blood pressure", "", "red"), D("pressure reading", "", "green")])
    assert out == "blood " + span("pressure reading", "green")


def test_equal_length_overlap_keeps_caller_order():
    spans = find_spans("abcd", [D("abc", "", "red"), D("bcd", "", "green")])
    assert [(s.start, s.end, s.directive.color) for s in spans] == [(0, 3, "red")]

    spans = find_spans("abcd", [D("bcd", "", "green"), D("abc", "", "red")])
    assert [(s.start, s.end, s.directive.color) for s in spans] == [(1, 4, "green")]


def test_case_insensitive_and_keeps_source_casing():
    out = highlight("Your hemoglobin is low", [D("Hemoglobin", "iron deficiency", "red")])
    assert span("hemoglobin", "red", "iron deficiency") in out


def test_every_occurrence_is_wrapped():
    out = highlight("LDL is high. ldl was high last year too.", [D("LDL", "", "red")])
    assert out.count('class="hl hl-red"') == 2


@pytest.mark.parametrize("phrase", ["a.b", "a*b", "(x+y)", "[", "\\d", "^$", "a|b", "{2}", "?"])
def test_pattern_characters_match_literally(phrase):
    text = "axb aab (xxy) no match here"
    out = highlight(text, [D(phrase, "", "red")])
    assert out == text


def test_pattern_characters_wrap_only_literal_text():
    text = "a.b a*b (x+y) axb"
    out = highlight(text, [D("a.b"), D("a*b"), D("(x+y)")])
    assert out.count("<span") == 3
    assert out.endswith(" axb")


def test_tooltip_text_is_never_matched():
    directives = [D("hypertension", "elevated blood pressure", "red"), D("blood", "", "yellow")]
    out = highlight("hypertension noted", directives)
    assert out == span("hypertension", "red", "elevated blood pressure") + " noted"


def test_rendering_is_repeatable():
    text = "Glucose 110, glucose high, HbA1c 6.1%"
    directives = [D("glucose", "check", "yellow"), D("HbA1c 6.1%", "prediabetes", "red")]
    first = highlight(text, directives)
    assert highlight(text, directives) == first
    assert highlight(text, directives) == first


def test_reason_is_attribute_escaped_and_missing_reason_is_empty():
    out = highlight("CRP raised", [D("CRP", 'says "high" <now>', "red")])
    assert 'title="says &quot;high&quot; &lt;now&gt;"' in out
    out = highlight("CRP raised", [D("CRP", "", "red")])
    assert 'title=""' in out


def test_unmatched_directive_is_noop():
    assert highlight("all normal", [D("tumour", "x", "red")]) == "all normal"


def test_empty_phrase_is_skipped():
    assert highlight("abc", [D("", "x", "red")]) == "abc"


def test_escape_text_escapes_body_after_matching():
    out = highlight("a < b & c", [D("b & c", "", "green")], escape_text=True)
    assert out == "a &lt; " + span("b &amp; c", "green")
    assert highlight("x < y", [], escape_text=True) == "x &lt; y"


def test_unknown_color_falls_back_to_yellow():
    assert severity_class("purple") == "hl-yellow"
    assert severity_class("green") == "hl-green"


def test_pdf_wrapper():
    out = highlight("ALT 80 U/L", [D("ALT 80", "", "red")], wrap=pdf_span, escape_text=True)
    assert out == '<font backColor="#fecaca"><b>ALT 80</b></font> U/L'
