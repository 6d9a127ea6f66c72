"""
PDF rendering of saved impact reports with reportlab
"""
import io
import logging

from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

logger = logging.getLogger(__name__)

MARGIN = 50
LINE_HEIGHT = 16


class ReportPdfWriter:
    """Plain text page layout: a title, a metadata block and one line per area"""

    def __init__(self):
        self.buffer = io.BytesIO()
        self.pdf = canvas.Canvas(self.buffer, pagesize=letter)
        self.width, self.height = letter
        self.y = self.height - MARGIN

    def _ensure_space(self, lines=1):
        if self.y - lines * LINE_HEIGHT < MARGIN:
            self.pdf.showPage()
            self.y = self.height - MARGIN

    def heading(self, text, size=16):
        self._ensure_space(2)
        self.pdf.setFont('Helvetica-Bold', size)
        self.pdf.drawString(MARGIN, self.y, text)
        self.y -= LINE_HEIGHT + 4
        self.pdf.setStrokeColorRGB(0.7, 0.7, 0.7)
        self.pdf.line(MARGIN, self.y + 8, self.width - MARGIN, self.y + 8)

    def line(self, text, size=10, indent=0):
        self._ensure_space()
        self.pdf.setFont('Helvetica', size)
        self.pdf.drawString(MARGIN + indent, self.y, text)
        self.y -= LINE_HEIGHT

    def gap(self):
        self.y -= LINE_HEIGHT / 2

    def finish(self):
        self.pdf.showPage()
        self.pdf.save()
        return self.buffer.getvalue()


def _format_score(value):
    if value is None:
        return 'N/A'
    return f'{value:.1f}'


def render_impact_report(report):
    """Render an ImpactReport to PDF bytes."""
    project = report.project
    writer = ReportPdfWriter()

    writer.heading('Competency Development Impact Report')
    writer.line(f'Project: {project.name}')
    writer.line(f'Organization: {project.organization.name}')
    writer.line(f'Domain: {project.domain.name}')
    if report.participant is not None:
        writer.line(f'Participant: {report.participant.full_name} <{report.participant.email}>')
    else:
        writer.line('Scope: cohort')
    writer.line(f'Generated: {report.generated_at:%Y-%m-%d %H:%M}')
    writer.line(f'Overall improvement: {_format_score(report.overall_improvement_percent)}')
    writer.gap()

    data = report.report_data or {}
    improvements = data.get('improvements') or data.get('area_stats') or []
    if improvements:
        writer.heading('Competency areas', size=13)
        for row in improvements:
            area = row.get('area') or {}
            label = f"{area.get('code', '')} {area.get('name', '')}".strip()
            baseline = row.get('baseline') or {}
            post = row.get('post') or {}
            base_score = baseline.get('score', baseline.get('avg_score'))
            post_score = post.get('score', post.get('avg_score'))
            writer.line(label, size=11)
            writer.line(
                f"Baseline {_format_score(base_score)}  Post {_format_score(post_score)}  "
                f"Change {_format_score(row.get('improvement'))}",
                indent=15,
            )
        writer.gap()

    for title, key in (('Strengths', 'strengths'), ('Development areas', 'development_areas')):
        entries = data.get(key) or []
        if not entries:
            continue
        writer.heading(title, size=13)
        for entry in entries:
            writer.line(f"- {entry.get('area')}: {_format_score(entry.get('score'))}")
        writer.gap()

    recommendations = report.recommendations or []
    if isinstance(recommendations, list) and recommendations:
        writer.heading('Recommendations', size=13)
        for entry in recommendations:
            writer.line(f'- {entry}' if not isinstance(entry, dict) else f"- {entry.get('name') or entry}")

    content = writer.finish()
    logger.info("Rendered impact report %s (%d bytes)", report.id, len(content))
    return content
