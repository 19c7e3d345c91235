"""ReportLab-based PDF report generator for fire risk survey results.

Produces a multi-page client report covering the overall risk score,
building construction and combustibility, the sector-weighted dimension
breakdown, recommendations and a methodology appendix, with embedded
Matplotlib charts.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
import tempfile
from typing import Dict, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    Image,
    KeepTogether,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from fire_risk_survey import __version__
from fire_risk_survey.data.models import Priority, RiskBand, SurveyResult
from fire_risk_survey.reporting.charts import ChartGenerator
from fire_risk_survey.scoring.thresholds import (
    combustibility_to_label,
    construction_rating_label,
)
from fire_risk_survey.scoring.weights import WALL_FACTOR_ROOF_LED, WALL_FACTOR_WALL_ONLY

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Color palette
# ---------------------------------------------------------------------------
DARK_RED = colors.HexColor('#B71C1C')
BAND_GREEN = colors.HexColor('#4CAF50')
BAND_AMBER = colors.HexColor('#FFC107')
BAND_ORANGE = colors.HexColor('#FF9800')
BAND_RED = colors.HexColor('#F44336')
LIGHT_GRAY = colors.HexColor('#F5F5F5')
WHITE = colors.white

_PRIORITY_HEX = {
    Priority.critical: '#F44336',
    Priority.high: '#FF9800',
    Priority.medium: '#FFA000',
    Priority.low: '#2196F3',
}


def _band_color(band: RiskBand) -> colors.Color:
    """Return the display color for a risk band."""
    if band in (RiskBand.very_good, RiskBand.good):
        return BAND_GREEN
    if band is RiskBand.tolerable:
        return BAND_AMBER
    if band is RiskBand.poor:
        return BAND_ORANGE
    return BAND_RED


def _strip_rich_tags(text: str) -> str:
    """Remove Rich console markup tags such as [green] or [/bold]."""
    return re.sub(r'\[/?[a-z_ ]+\]', '', text)


class PDFReportGenerator:
    """Generates a multi-page PDF report from a :class:`SurveyResult`."""

    def __init__(self) -> None:
        self._styles = getSampleStyleSheet()
        self._register_custom_styles()

    # ------------------------------------------------------------------
    # Custom paragraph styles
    # ------------------------------------------------------------------

    def _register_custom_styles(self) -> None:
        """Add project-specific paragraph styles to the stylesheet."""
        self._styles.add(ParagraphStyle(
            'CoverTitle',
            parent=self._styles['Title'],
            fontSize=28,
            leading=34,
            textColor=DARK_RED,
            spaceAfter=12,
            alignment=1,
        ))
        self._styles.add(ParagraphStyle(
            'CoverSubtitle',
            parent=self._styles['Normal'],
            fontSize=16,
            leading=20,
            textColor=colors.HexColor('#333333'),
            spaceAfter=8,
            alignment=1,
        ))
        self._styles.add(ParagraphStyle(
            'CoverDate',
            parent=self._styles['Normal'],
            fontSize=12,
            leading=16,
            textColor=colors.HexColor('#666666'),
            spaceAfter=24,
            alignment=1,
        ))
        self._styles.add(ParagraphStyle(
            'SectionTitle',
            parent=self._styles['Heading1'],
            fontSize=20,
            leading=24,
            textColor=DARK_RED,
            spaceAfter=12,
            spaceBefore=6,
        ))
        self._styles.add(ParagraphStyle(
            'SubSection',
            parent=self._styles['Heading2'],
            fontSize=14,
            leading=18,
            textColor=DARK_RED,
            spaceAfter=8,
        ))
        self._styles.add(ParagraphStyle(
            'BodyText2',
            parent=self._styles['Normal'],
            fontSize=10,
            leading=14,
            spaceAfter=6,
        ))
        self._styles.add(ParagraphStyle(
            'Finding',
            parent=self._styles['Normal'],
            fontSize=10,
            leading=13,
            leftIndent=18,
            bulletIndent=6,
            spaceAfter=3,
        ))
        self._styles.add(ParagraphStyle(
            'FooterStyle',
            parent=self._styles['Normal'],
            fontSize=8,
            textColor=colors.HexColor('#999999'),
            alignment=1,
        ))
        self._styles.add(ParagraphStyle(
            'BandLarge',
            parent=self._styles['Normal'],
            fontSize=36,
            leading=42,
            alignment=1,
            spaceAfter=4,
        ))
        self._styles.add(ParagraphStyle(
            'ScoreLabel',
            parent=self._styles['Normal'],
            fontSize=12,
            leading=14,
            alignment=1,
            textColor=colors.HexColor('#444444'),
            spaceAfter=4,
        ))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate(self, result: SurveyResult, output_path: str) -> None:
        """Generate a complete PDF report and save to *output_path*."""
        chart_paths: Dict[str, str] = {}
        tmpdir: Optional[str] = None
        try:
            tmpdir = tempfile.mkdtemp(prefix='fire_survey_charts_')
            try:
                chart_paths = ChartGenerator(result).save_all(tmpdir)
            except Exception:
                logger.warning(
                    "Chart generation failed; PDF will be produced without charts.",
                    exc_info=True,
                )

            doc = SimpleDocTemplate(
                output_path,
                pagesize=A4,
                topMargin=0.75 * inch,
                bottomMargin=0.75 * inch,
                leftMargin=0.75 * inch,
                rightMargin=0.75 * inch,
                title=f"Fire Risk Survey - {result.survey.name}",
            )

            elements = []
            elements.extend(self._build_cover(result))
            elements.append(PageBreak())
            elements.extend(self._build_executive_summary(result, chart_paths))
            elements.append(PageBreak())
            elements.extend(self._build_construction(result, chart_paths))
            elements.append(PageBreak())
            elements.extend(self._build_risk(result, chart_paths))
            elements.append(PageBreak())
            elements.extend(self._build_recommendations(result, chart_paths))
            elements.append(PageBreak())
            elements.extend(self._build_appendix())

            doc.build(elements, onFirstPage=self._add_page_number,
                      onLaterPages=self._add_page_number)

        finally:
            if tmpdir and os.path.isdir(tmpdir):
                shutil.rmtree(tmpdir, ignore_errors=True)

    # ------------------------------------------------------------------
    # Page number footer callback
    # ------------------------------------------------------------------

    @staticmethod
    def _add_page_number(canvas, doc) -> None:
        """Draw the page number in the footer of every page."""
        canvas.saveState()
        canvas.setFont('Helvetica', 8)
        canvas.setFillColor(colors.HexColor('#999999'))
        canvas.drawCentredString(A4[0] / 2.0, 0.5 * inch, f"Page {canvas.getPageNumber()}")
        canvas.restoreState()

    # ------------------------------------------------------------------
    # Cover
    # ------------------------------------------------------------------

    def _build_cover(self, result: SurveyResult) -> list:
        elements: list = []
        survey = result.survey

        elements.append(Spacer(1, 1.5 * inch))
        elements.append(Paragraph("Fire &amp; Property Risk Survey", self._styles['CoverTitle']))
        elements.append(Spacer(1, 0.25 * inch))
        elements.append(Paragraph(escape(survey.name), self._styles['CoverSubtitle']))
        if survey.client:
            elements.append(Paragraph(escape(survey.client), self._styles['CoverSubtitle']))
        if survey.location:
            elements.append(Paragraph(escape(survey.location), self._styles['CoverSubtitle']))
        elements.append(Spacer(1, 0.15 * inch))
        elements.append(Paragraph(
            result.timestamp.strftime('%d %B %Y'), self._styles['CoverDate'],
        ))
        elements.append(Spacer(1, 0.5 * inch))

        band = result.risk.band
        band_hex = _band_color(band).hexval()
        elements.append(Paragraph(
            f'<font color="{band_hex}"><b>{band.value}</b></font>',
            self._styles['BandLarge'],
        ))
        elements.append(Paragraph(
            f"Overall Risk Score: {result.risk.overall_score:.1f} / 100",
            self._styles['ScoreLabel'],
        ))
        elements.append(Spacer(1, 0.5 * inch))

        badges = [
            (f"{result.site_combustibility:.1f}", "Site combustibility"),
            (f"{result.construction_rating}/5", "Construction rating"),
            (f"{result.overall_grade:.1f}/5", "Section grade"),
        ]
        row = [
            [Paragraph(f'<font size="20"><b>{value}</b></font>', self._styles['BodyText2']),
             Paragraph(label, self._styles['BodyText2'])]
            for value, label in badges
        ]
        badge_table = Table([row], colWidths=[2.1 * inch] * 3)
        badge_table.setStyle(TableStyle([
            ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('BOX', (0, 0), (0, 0), 0.5, DARK_RED),
            ('BOX', (1, 0), (1, 0), 0.5, DARK_RED),
            ('BOX', (2, 0), (2, 0), 0.5, DARK_RED),
            ('LEFTPADDING', (0, 0), (-1, -1), 8),
            ('RIGHTPADDING', (0, 0), (-1, -1), 8),
            ('TOPPADDING', (0, 0), (-1, -1), 8),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 8),
        ]))
        elements.append(badge_table)
        return elements

    # ------------------------------------------------------------------
    # Executive Summary
    # ------------------------------------------------------------------

    def _build_executive_summary(self, result: SurveyResult,
                                 chart_paths: Dict[str, str]) -> list:
        elements: list = []
        elements.append(Paragraph("Executive Summary", self._styles['SectionTitle']))
        elements.append(Spacer(1, 0.15 * inch))

        summary_text = _strip_rich_tags(result.executive_summary)
        for paragraph in summary_text.split('\n'):
            paragraph = paragraph.strip()
            if paragraph:
                elements.append(Paragraph(escape(paragraph), self._styles['BodyText2']))

        elements.append(Spacer(1, 0.25 * inch))
        self._maybe_add_chart(elements, chart_paths, 'dimension_radar',
                              width=4.5 * inch, height=4.5 * inch)
        return elements

    # ------------------------------------------------------------------
    # Construction & combustibility
    # ------------------------------------------------------------------

    def _build_construction(self, result: SurveyResult,
                            chart_paths: Dict[str, str]) -> list:
        elements: list = []
        elements.append(Paragraph("Construction &amp; Combustibility",
                                  self._styles['SectionTitle']))
        elements.append(Paragraph(
            f"Site combustibility: <b>{result.site_combustibility:.1f}</b> / 100 "
            f"({combustibility_to_label(result.site_combustibility)}) &nbsp;&nbsp; "
            f"Site construction rating: <b>{result.construction_rating}</b> / 5 "
            f"({construction_rating_label(result.construction_rating)})",
            self._styles['SubSection'],
        ))

        if result.building_scores:
            header = ['Building', 'Area (m²)', 'Walls', 'Roof', 'Combustibility', 'Rating']
            data = [header]
            for bs in result.building_scores:
                data.append([
                    Paragraph(escape(bs.name or bs.building_id), self._styles['BodyText2']),
                    f"{bs.total_area_sqm:,.0f}",
                    f"{bs.walls_combustibility:.1f}",
                    f"{bs.roof_combustibility:.1f}",
                    f"{bs.combustibility:.1f}",
                    f"{bs.construction_rating} - {construction_rating_label(bs.construction_rating)}",
                ])
            col_widths = [1.6 * inch, 0.9 * inch, 0.7 * inch, 0.7 * inch,
                          1.1 * inch, 1.4 * inch]
            elements.append(self._striped_table(data, col_widths))
        else:
            elements.append(Paragraph("No buildings recorded.", self._styles['BodyText2']))

        if result.warnings:
            elements.append(Paragraph("<b>Data Entry Warnings</b>", self._styles['SubSection']))
            for warning in result.warnings:
                elements.append(Paragraph(f"• {escape(warning)}", self._styles['Finding']))

        elements.append(Spacer(1, 0.2 * inch))
        self._maybe_add_chart(elements, chart_paths, 'building_combustibility_bar',
                              width=5.5 * inch, height=2.75 * inch)
        elements.append(Spacer(1, 0.15 * inch))
        self._maybe_add_chart(elements, chart_paths, 'material_tiers_stacked',
                              width=5.5 * inch, height=2.75 * inch)
        return elements

    # ------------------------------------------------------------------
    # Sector-weighted risk
    # ------------------------------------------------------------------

    def _build_risk(self, result: SurveyResult,
                    chart_paths: Dict[str, str]) -> list:
        elements: list = []
        risk = result.risk
        band_hex = _band_color(risk.band).hexval()

        elements.append(Paragraph("Sector-Weighted Risk Score", self._styles['SectionTitle']))
        elements.append(Paragraph(
            f'Score: <b>{risk.overall_score:.1f}</b> / 100 &nbsp;&nbsp; '
            f'Band: <font color="{band_hex}"><b>{risk.band.value}</b></font> &nbsp;&nbsp; '
            f'Sector: {escape(risk.sector)}',
            self._styles['SubSection'],
        ))

        data = [['Dimension', 'Score', 'Weight', 'Share', 'Contribution']]
        for c in risk.contributions:
            data.append([
                c.name,
                f"{c.score:.1f}",
                f"{c.weight:g}",
                c.percentage,
                f"{c.contribution:.1f}",
            ])
        col_widths = [2.4 * inch, 0.9 * inch, 0.9 * inch, 0.9 * inch, 1.1 * inch]
        elements.append(self._striped_table(data, col_widths))

        if risk.lowest_contributors:
            elements.append(Paragraph("<b>Lowest Contributors</b>", self._styles['SubSection']))
            for c in risk.lowest_contributors:
                elements.append(Paragraph(
                    f"• {escape(c.name)}: {c.score:.0f}/100 at {c.percentage} weighting",
                    self._styles['Finding'],
                ))

        elements.append(Spacer(1, 0.2 * inch))
        self._maybe_add_chart(elements, chart_paths, 'contribution_bar',
                              width=5.5 * inch, height=2.75 * inch)
        return elements

    # ------------------------------------------------------------------
    # Recommendations
    # ------------------------------------------------------------------

    def _build_recommendations(self, result: SurveyResult,
                               chart_paths: Dict[str, str]) -> list:
        elements: list = []
        elements.append(Paragraph("Recommendations", self._styles['SectionTitle']))
        elements.append(Spacer(1, 0.1 * inch))

        if not result.recommendations:
            elements.append(Paragraph(
                "No recommendations generated.", self._styles['BodyText2']
            ))
            return elements

        header = ['#', 'Priority', 'Recommendation', 'Category']
        data = [header]
        for rec in result.recommendations:
            if rec.priority is not None:
                priority = Paragraph(
                    f'<font color="{_PRIORITY_HEX[rec.priority]}"><b>{rec.priority.value}</b></font>',
                    self._styles['BodyText2'],
                )
            else:
                priority = '-'
            data.append([
                str(rec.rank),
                priority,
                Paragraph(escape(rec.title), self._styles['BodyText2']),
                Paragraph(escape(rec.category), self._styles['BodyText2']),
            ])
        col_widths = [0.4 * inch, 0.9 * inch, 3.5 * inch, 1.8 * inch]
        elements.append(self._striped_table(data, col_widths))
        elements.append(Spacer(1, 0.2 * inch))

        for rec in result.recommendations:
            block = [
                Paragraph(f"<b>{rec.rank}. {escape(rec.title)}</b>", self._styles['BodyText2']),
                Paragraph(f"<i>Observation:</i> {escape(rec.description)}",
                          self._styles['Finding']),
            ]
            if rec.action:
                block.append(Paragraph(f"<i>Action:</i> {escape(rec.action)}",
                                       self._styles['Finding']))
            elements.append(KeepTogether(block))

        elements.append(Spacer(1, 0.2 * inch))
        self._maybe_add_chart(elements, chart_paths, 'priority_pie',
                              width=3.5 * inch, height=3.5 * inch)
        return elements

    # ------------------------------------------------------------------
    # Appendix
    # ------------------------------------------------------------------

    def _build_appendix(self) -> list:
        elements: list = []
        elements.append(Paragraph("Appendix: Methodology", self._styles['SectionTitle']))
        elements.append(Spacer(1, 0.15 * inch))

        elements.append(Paragraph("<b>Combustibility</b>", self._styles['SubSection']))
        elements.append(Paragraph(
            "Each wall and roof / ceiling surface is classified into non-combustible "
            "(heavy and light), transitional (approved foam / plastic) and combustible "
            "(unapproved foam / plastic and other) material. Combustible material counts "
            "in full and transitional material at half, giving a 0-100 figure per surface.",
            self._styles['BodyText2'],
        ))
        elements.append(Paragraph(
            "Where the roof / ceiling contains any combustible or transitional material "
            f"it leads the building score, with walls added at {WALL_FACTOR_ROOF_LED:.0%}. "
            "Where the roof / ceiling is fully non-combustible, walls count at "
            f"{WALL_FACTOR_WALL_ONLY:.0%}. The site figure is the mean of building "
            "scores weighted by floor plus roof area.",
            self._styles['BodyText2'],
        ))
        elements.append(Spacer(1, 0.2 * inch))

        elements.append(Paragraph("<b>Risk Score</b>", self._styles['SubSection']))
        elements.append(Paragraph(
            "Six dimension scores (0-100) are combined as a weighted mean using the "
            "weights configured for the site's industry sector. Weights are relative; "
            "only their proportions matter.",
            self._styles['BodyText2'],
        ))
        elements.append(Spacer(1, 0.1 * inch))

        band_data = [
            ['Band', 'Score Range'],
            ['Very Good', '85 - 100'],
            ['Good', '70 - 84'],
            ['Tolerable', '55 - 69'],
            ['Poor', '40 - 54'],
            ['Very Poor', '0 - 39'],
        ]
        band_tbl = Table(band_data, colWidths=[1.5 * inch, 1.5 * inch])
        band_tbl.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), DARK_RED),
            ('TEXTCOLOR', (0, 0), (-1, 0), WHITE),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 10),
            ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.HexColor('#CCCCCC')),
            ('BACKGROUND', (0, 1), (-1, 2), colors.HexColor('#E8F5E9')),
            ('BACKGROUND', (0, 3), (-1, 3), colors.HexColor('#FFF8E1')),
            ('BACKGROUND', (0, 4), (-1, 5), colors.HexColor('#FFEBEE')),
            ('TOPPADDING', (0, 0), (-1, -1), 4),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
        ]))
        elements.append(band_tbl)
        elements.append(Spacer(1, 0.3 * inch))

        elements.append(Paragraph("<b>Limitations</b>", self._styles['SubSection']))
        elements.append(Paragraph(
            "The combustibility figure is an indicator of how much of the building "
            "fabric is flammable. It is not a certified fire rating.",
            self._styles['BodyText2'],
        ))
        elements.append(Spacer(1, 0.5 * inch))
        elements.append(Paragraph(
            f"Generated by fire-risk-survey v{__version__}",
            self._styles['FooterStyle'],
        ))
        return elements

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    def _striped_table(self, data: list, col_widths: list) -> Table:
        tbl = Table(data, colWidths=col_widths, repeatRows=1)
        style_commands = [
            ('BACKGROUND', (0, 0), (-1, 0), DARK_RED),
            ('TEXTCOLOR', (0, 0), (-1, 0), WHITE),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 9),
            ('ALIGN', (1, 0), (-1, -1), 'CENTER'),
            ('ALIGN', (0, 0), (0, -1), 'LEFT'),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.HexColor('#CCCCCC')),
            ('TOPPADDING', (0, 0), (-1, -1), 4),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
            ('LEFTPADDING', (0, 0), (-1, -1), 6),
            ('RIGHTPADDING', (0, 0), (-1, -1), 6),
        ]
        for i in range(1, len(data)):
            if i % 2 == 0:
                style_commands.append(('BACKGROUND', (0, i), (-1, i), LIGHT_GRAY))
        tbl.setStyle(TableStyle(style_commands))
        return tbl

    def _maybe_add_chart(self, elements: list, chart_paths: Dict[str, str],
                         chart_key: str, width: float, height: float) -> None:
        """Add a chart image if available, otherwise skip."""
        path = chart_paths.get(chart_key)
        if path and os.path.isfile(path):
            try:
                elements.append(KeepTogether([Image(path, width=width, height=height)]))
            except Exception:
                logger.warning(
                    "Failed to embed chart '%s'; skipping.", chart_key,
                    exc_info=True,
                )
        elif chart_key in chart_paths:
            logger.warning(
                "Chart file for '%s' not found at '%s'; skipping.", chart_key, path,
            )
