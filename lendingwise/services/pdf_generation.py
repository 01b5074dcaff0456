import logging
import time
from datetime import datetime, timezone
from typing import Optional, Sequence

from fpdf import FPDF
from fpdf.fonts import FontFace

from lendingwise.config.settings import settings
from lendingwise.errors import ExportError
from lendingwise.models import AnalysisResult
from lendingwise.services.report_values import (
    lender_rows,
    metrics_strip,
    summary_rows,
    verdict_label,
)
from lendingwise.utils.formatting import or_placeholder
from lendingwise.utils.text import clean_text, to_latin1

logger = logging.getLogger("lendingwise.pdf")

PRIMARY = (79, 70, 229)
ACCENT = (15, 23, 42)
DANGER = (220, 38, 38)
APPROVE_GREEN = (5, 150, 105)
WHITE = (255, 255, 255)
MUTED = (100, 116, 139)


def report_filename(timestamp_ms: int) -> str:
    return f"Financial_Audit_{timestamp_ms}.pdf"


class AuditPDF(FPDF):
    """FPDF with a Unicode font when one is installed, and a count of drawn tables."""

    def __init__(self):
        super().__init__(format="A4")
        self.set_auto_page_break(auto=True, margin=15)
        self.set_margins(14, 15, 14)
        self.tables_rendered = 0
        self.verdict_color = None

        if settings.FONT_PATH.exists():
            self.add_font("DejaVuSans", style="", fname=str(settings.FONT_PATH))
            self.add_font("DejaVuSans", style="B", fname=str(settings.FONT_PATH))
            self.base_family = "DejaVuSans"
            self.unicode_font = True
        else:
            self.base_family = "helvetica"
            self.unicode_font = False

    def safe_text(self, value: str) -> str:
        cleaned = clean_text(value)
        return cleaned if self.unicode_font else to_latin1(cleaned)

    def use_font(self, size: float, bold: bool = False):
        self.set_font(self.base_family, "B" if bold else "", size)

    def render_table(self, rows: Sequence[Sequence[str]], heading_fill, font_size: float, col_widths):
        self.use_font(font_size)
        self.set_text_color(*ACCENT)
        headings = FontFace(emphasis="BOLD", color=WHITE, fill_color=heading_fill)
        with self.table(headings_style=headings, col_widths=col_widths, line_height=font_size * 0.6) as table:
            for data_row in rows:
                row = table.row()
                for datum in data_row:
                    row.cell(self.safe_text(datum))
        self.tables_rendered += 1


def _header(pdf: AuditPDF, timestamp_ms: int):
    pdf.set_fill_color(*ACCENT)
    pdf.rect(0, 0, 210, 45, style="F")

    pdf.set_text_color(*WHITE)
    pdf.use_font(22, bold=True)
    pdf.text(14, 22, "ELITE FINANCIAL AUDIT REPORT")

    pdf.use_font(8)
    pdf.text(14, 32, f"REF: LW-CORE-AUDIT-{timestamp_ms}")
    pdf.text(14, 37, "UNDERWRITER ID: AI-ENGINE-PRO")


def _verdict_banner(pdf: AuditPDF, result: AnalysisResult):
    pdf.verdict_color = APPROVE_GREEN if result.conclusion.is_approved else DANGER
    pdf.set_fill_color(*pdf.verdict_color)
    pdf.rect(14, 50, 182, 25, style="F", round_corners=True, corner_radius=2)

    repayment = or_placeholder(result.conclusion.monthly_repayment, "RM 0.00")

    pdf.set_text_color(*WHITE)
    pdf.use_font(10, bold=True)
    pdf.text(20, 58, "AUDIT VERDICT")
    pdf.text(120, 58, "MONTHLY REPAYMENT")
    pdf.use_font(18, bold=True)
    pdf.text(20, 68, pdf.safe_text(verdict_label(result)))
    pdf.use_font(16, bold=True)
    pdf.text(120, 68, pdf.safe_text(repayment))


def _section_title(pdf: AuditPDF, title: str, y: float):
    pdf.set_text_color(*ACCENT)
    pdf.use_font(11, bold=True)
    pdf.text(14, y, title)


def _conclusion(pdf: AuditPDF, result: AnalysisResult):
    y = pdf.get_y() + 15
    if y > pdf.h - 60:
        pdf.add_page()
        y = pdf.t_margin + 5
    _section_title(pdf, "Audit Conclusion & Logic:", y)

    explanation = or_placeholder(result.conclusion.explanation, "Detailed analysis not generated.")
    pdf.set_text_color(*ACCENT)
    pdf.use_font(9)
    pdf.set_xy(14, y + 3)
    pdf.multi_cell(180, 5, pdf.safe_text(explanation))

    cell_w = 182 / 4
    pdf.set_y(pdf.get_y() + 6)
    strip = metrics_strip(result)

    pdf.set_text_color(*MUTED)
    pdf.use_font(7, bold=True)
    pdf.set_x(14)
    for label, _ in strip:
        pdf.cell(cell_w, 6, label.upper(), border="LTR")
    pdf.ln(6)

    pdf.set_text_color(*ACCENT)
    pdf.use_font(11, bold=True)
    pdf.set_x(14)
    for _, value in strip:
        pdf.cell(cell_w, 8, pdf.safe_text(value), border="LBR")
    pdf.ln(8)


def render_report(result: AnalysisResult, timestamp_ms: Optional[int] = None) -> AuditPDF:
    """Lay out the audit report; returns the unrendered document."""
    timestamp_ms = timestamp_ms if timestamp_ms is not None else int(time.time() * 1000)

    pdf = AuditPDF()
    pdf.set_title("Financial Audit Report")
    pdf.set_creation_date(datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc))
    pdf.add_page()

    _header(pdf, timestamp_ms)
    _verdict_banner(pdf, result)

    _section_title(pdf, "Summary of Financial Standing:", 85)
    pdf.set_y(90)
    pdf.render_table(
        [("Category", "Calculated Value", "Risk Assessment")] + summary_rows(result),
        heading_fill=PRIMARY,
        font_size=9,
        col_widths=(1, 1, 1),
    )

    if result.hidden_loans:
        y = pdf.get_y() + 10
        _section_title(pdf, "Verified Hidden Lenders & Private Inflows:", y)
        pdf.set_y(y + 5)
        pdf.render_table(
            [("Lender Entity", "Search Verification Details", "Amount")] + lender_rows(result),
            heading_fill=DANGER,
            font_size=8,
            col_widths=(2, 4, 1.5),
        )

    _conclusion(pdf, result)
    return pdf


def export_report(result: AnalysisResult, timestamp_ms: Optional[int] = None) -> bytes:
    try:
        pdf = render_report(result, timestamp_ms)
        content = bytes(pdf.output())
    except Exception as e:
        raise ExportError(f"PDF export failed: {e}") from e
    logger.info(f"Rendered audit report: {pdf.page_no()} page(s), {pdf.tables_rendered} table(s)")
    return content
