import io
from xml.sax.saxutils import escape

from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle, ListFlowable, ListItem
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib import colors

from core.highlight import highlight, pdf_span
from core.i18n import t
from core.types import MedicalReport

URGENCY_COLORS = {
    "low": "#047857",
    "medium": "#1d4ed8",
    "high": "#b45309",
    "emergency": "#be123c",
}


def _para(text: str) -> str:
    return escape(text).replace("\n", "<br/>")


def _bullets(items: list[str], style) -> ListFlowable:
    return ListFlowable(
        [ListItem(Paragraph(_para(x), style)) for x in items],
        bulletType="1",
        leftIndent=14,
    )


def build_pdf(report: MedicalReport, lang: str = "en") -> bytes:
    data = report.analysis_data
    if data is None:
        raise ValueError(f"report {report.id} has no analysis")

    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=A4, title=f"{data.document_type} — {report.file_name}")
    styles = getSampleStyleSheet()
    story = []

    story.append(Paragraph(f"<b>{escape(data.document_type)}</b>", styles["Title"]))
    urgency_col = URGENCY_COLORS.get(data.urgency_level, "#455a64")
    info = (
        f"<b>File:</b> {escape(report.file_name)} &nbsp;&nbsp; "
        f"<b>Date:</b> {escape(report.created_at[:10] or '—')} &nbsp;&nbsp; "
        f"<b>{escape(t('urgency', lang))}:</b> "
        f"<font color=\"{urgency_col}\"><b>{escape(t(data.urgency_level, lang))}</b></font>"
    )
    story.append(Paragraph(info, styles["Normal"]))
    story.append(Spacer(1, 10))

    def section(title_key: str, body: str) -> None:
        story.append(Paragraph(escape(t(title_key, lang)), styles["Heading2"]))
        story.append(Paragraph(body, styles["BodyText"]))
        story.append(Spacer(1, 6))

    marked = lambda text: highlight(text, data.highlight_map, wrap=pdf_span, escape_text=True).replace("\n", "<br/>")

    section("summary", marked(data.summary))
    if data.executive_summary:
        section("executive_summary", _para(data.executive_summary))
    section("clinical_analysis", marked(data.clinical_report))

    if data.vital_markers:
        story.append(Paragraph(escape(t("markers", lang)), styles["Heading2"]))
        head = [t(k, lang) for k in ("vital_name", "value", "range", "status")]
        rows = [[m.name, f"{m.value} {m.unit}".strip(), m.range or "—", t(m.status, lang)] for m in data.vital_markers]
        tbl = Table([head] + rows, hAlign='LEFT', colWidths=[150, 110, 130, 90])
        style = [
            ('BACKGROUND', (0,0), (-1,0), colors.HexColor('#eeeeee')),
            ('GRID', (0,0), (-1,-1), 0.25, colors.grey),
            ('FONTNAME', (0,0), (-1,0), 'Helvetica-Bold'),
            ('ROWBACKGROUNDS', (0,1), (-1,-1), [colors.white, colors.HexColor('#fafafa')]),
        ]
        for i, m in enumerate(data.vital_markers, start=1):
            if m.status != "normal":
                col = '#be123c' if m.status == "critical" else '#b45309'
                style.append(('TEXTCOLOR', (3,i), (3,i), colors.HexColor(col)))
        tbl.setStyle(TableStyle(style))
        story.append(tbl)
        story.append(Spacer(1, 6))

    for key, items in (
        ("lifestyle_tips", data.recommendations),
        ("treatment_plan", data.treatment_plan),
        ("differential_diagnosis", data.differential_diagnosis),
        ("complementary_tests", data.complementary_tests),
    ):
        if items:
            story.append(Paragraph(escape(t(key, lang)), styles["Heading2"]))
            story.append(_bullets(items, styles["BodyText"]))
            story.append(Spacer(1, 6))

    if data.geographic_tips:
        section("local_tips", _para(data.geographic_tips))

    story.append(Spacer(1, 10))
    story.append(Paragraph(
        f"<b>Disclaimer:</b> {escape(t('disclaimer_pdf', lang))}",
        styles['Italic']
    ))

    doc.build(story)
    return buf.getvalue()
