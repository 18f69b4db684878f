from .pdf_report import build_report_pdf, build_report_sections, report_filename

__all__ = ["build_report_pdf", "build_report_sections", "report_filename"]
