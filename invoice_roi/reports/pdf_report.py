"""PDF export of a calculated scenario.

The report only lays out values already present on the inputs and the
result; it never recomputes anything.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from io import BytesIO
from typing import Optional

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from invoice_roi.engine.result import CalculationResult
from invoice_roi.models.inputs import CalculationInput

from .formatting import (
    NOT_AVAILABLE,
    format_count,
    format_currency,
    format_number,
    format_percent,
)

DEFAULT_SCENARIO_NAME = "Unnamed Scenario"

PRIMARY_BLUE = (37, 99, 235)
POSITIVE_GREEN = (16, 185, 129)
BODY_GREY = (60, 60, 60)
MUTED_GREY = (100, 100, 100)
FOOTER_GREY = (150, 150, 150)
RULE_GREY = (200, 200, 200)


@dataclass(frozen=True)
class ReportLine:
    label: str
    value: str
    highlight: bool = False


@dataclass
class ReportSection:
    title: str
    lines: list[ReportLine] = field(default_factory=list)


def _months(value) -> str:
    text = format_number(value)
    return text if text == NOT_AVAILABLE else f"{text} months"


def _per_month(value) -> str:
    text = format_currency(value)
    return text if text == NOT_AVAILABLE else f"{text}/month"


def build_report_sections(
    inputs: CalculationInput,
    results: CalculationResult,
) -> list[ReportSection]:
    """Assemble the ordered report content."""
    breakdown = results.breakdown
    return [
        ReportSection(
            "INPUT PARAMETERS",
            [
                ReportLine("Monthly Invoice Volume:", format_count(inputs.monthly_invoice_volume)),
                ReportLine("AP Staff:", format_number(inputs.num_ap_staff)),
                ReportLine("Hours per Invoice:", format_number(inputs.avg_hours_per_invoice)),
                ReportLine("Hourly Wage:", format_currency(inputs.hourly_wage)),
                ReportLine("Manual Error Rate:", format_percent(inputs.error_rate_manual)),
                ReportLine("Error Cost:", format_currency(inputs.error_cost)),
                ReportLine("Time Horizon:", _months(inputs.time_horizon_months)),
                ReportLine(
                    "Implementation Cost:",
                    format_currency(inputs.one_time_implementation_cost),
                ),
            ],
        ),
        ReportSection(
            "RESULTS SUMMARY",
            [
                ReportLine("Monthly Savings:", format_currency(results.monthly_savings), True),
                ReportLine("Payback Period:", _months(results.payback_months)),
                ReportLine("ROI:", format_percent(results.roi_percentage), True),
                ReportLine("Cumulative Savings:", format_currency(results.cumulative_savings)),
                ReportLine("Net Savings:", format_currency(results.net_savings), True),
            ],
        ),
        ReportSection(
            "COST BREAKDOWN",
            [
                ReportLine("Manual Labor Cost:", _per_month(breakdown.manual_labor_cost)),
                ReportLine("Automation Cost:", _per_month(breakdown.automation_cost)),
                ReportLine("Error Savings:", _per_month(results.error_savings)),
                ReportLine(
                    "Monthly Net Savings:",
                    format_currency(breakdown.monthly_net_savings),
                    True,
                ),
            ],
        ),
    ]


def report_filename(scenario_name: Optional[str], on: Optional[date] = None) -> str:
    """ROI_Report_<name>_<YYYY-MM-DD>.pdf with whitespace runs replaced by '_'."""
    name = scenario_name or DEFAULT_SCENARIO_NAME
    on = on or datetime.now(tz=timezone.utc).date()
    slug = re.sub(r"\s+", "_", name)
    return f"ROI_Report_{slug}_{on.isoformat()}.pdf"


def _set_fill(pdf: canvas.Canvas, rgb: tuple[int, int, int]) -> None:
    pdf.setFillColorRGB(*(channel / 255 for channel in rgb))


def build_report_pdf(
    inputs: CalculationInput,
    results: CalculationResult,
    email: str,
    brand: str = "ROI Simulator",
    generated_at: Optional[datetime] = None,
) -> bytes:
    """Render the report to PDF bytes."""
    generated_at = generated_at or datetime.now(tz=timezone.utc)
    scenario_name = inputs.scenario_name or DEFAULT_SCENARIO_NAME

    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    page_width, page_height = A4
    left = 20 * mm
    label_x = 25 * mm
    value_x = 100 * mm

    def rule(y: float) -> None:
        pdf.setStrokeColorRGB(*(channel / 255 for channel in RULE_GREY))
        pdf.line(left, y, page_width - left, y)

    pdf.setTitle(f"ROI Report - {scenario_name}")

    pdf.setFont("Helvetica-Bold", 24)
    _set_fill(pdf, PRIMARY_BLUE)
    pdf.drawCentredString(page_width / 2, page_height - 25 * mm, "ROI REPORT")

    pdf.setFont("Helvetica", 10)
    _set_fill(pdf, MUTED_GREY)
    pdf.drawCentredString(
        page_width / 2,
        page_height - 35 * mm,
        f"Generated: {generated_at.strftime('%Y-%m-%d %H:%M %Z').strip()}",
    )
    pdf.drawCentredString(page_width / 2, page_height - 42 * mm, f"Scenario: {scenario_name}")
    rule(page_height - 48 * mm)

    y = page_height - 58 * mm
    for section in build_report_sections(inputs, results):
        pdf.setFont("Helvetica-Bold", 14)
        _set_fill(pdf, (0, 0, 0))
        pdf.drawString(left, y, section.title)
        y -= 10 * mm
        for line in section.lines:
            pdf.setFont("Helvetica", 10)
            _set_fill(pdf, BODY_GREY)
            pdf.drawString(label_x, y, line.label)
            if line.highlight:
                pdf.setFont("Helvetica-Bold", 10)
                _set_fill(pdf, POSITIVE_GREEN)
            pdf.drawString(value_x, y, line.value)
            y -= 7 * mm
        y -= 1 * mm
        rule(y)
        y -= 10 * mm

    pdf.setFont("Helvetica", 8)
    _set_fill(pdf, FOOTER_GREY)
    pdf.drawCentredString(page_width / 2, 17 * mm, f"Report generated by {brand}")
    pdf.drawCentredString(page_width / 2, 12 * mm, f"Contact: {email}")

    pdf.showPage()
    pdf.save()
    return buffer.getvalue()
