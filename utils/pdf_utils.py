# utils/pdf_utils.py
import html
import io
from datetime import datetime
from typing import Any, Dict, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from core.settings import settings
from utils.formatting import format_currency

# The built-in PDF fonts have no rupee glyph
PDF_CURRENCY = "INR "


def _money(amount) -> str:
    return format_currency(amount or 0, symbol=PDF_CURRENCY)


def _text(value: Any) -> str:
    return html.escape(str(value)) if value not in (None, "") else "-"


def _display_date(value: Optional[str]) -> str:
    if not value:
        return datetime.now().strftime("%d %b %Y")
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00")).strftime("%d %b %Y")
    except ValueError:
        return str(value)


def _styles() -> Dict[str, ParagraphStyle]:
    styles = getSampleStyleSheet()
    return {
        "company": ParagraphStyle(
            'Company',
            parent=styles['Heading1'],
            fontSize=22,
            alignment=1,
            spaceAfter=6,
        ),
        "title": ParagraphStyle(
            'DocTitle',
            parent=styles['Heading2'],
            fontSize=16,
            alignment=1,
            textColor=colors.HexColor('#2E75B6'),
            spaceAfter=18,
        ),
        "heading": ParagraphStyle(
            'SectionHeading',
            parent=styles['Heading3'],
            fontSize=13,
            spaceBefore=12,
            spaceAfter=6,
        ),
        "normal": styles['Normal'],
        "small": ParagraphStyle('Small', parent=styles['Normal'], fontSize=9, leading=12),
    }


def _table_style(header_bg: str = '#4472C4') -> TableStyle:
    return TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor(header_bg)),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('ALIGN', (2, 1), (-1, -1), 'RIGHT'),
    ])


def _build(story) -> bytes:
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, leftMargin=50, rightMargin=50, topMargin=50, bottomMargin=50)
    doc.build(story)
    buffer.seek(0)
    return buffer.getvalue()


def generate_quotation_pdf(quotation: Dict[str, Any]) -> bytes:
    """Render a stored quotation as an A4 PDF and return its bytes."""
    s = _styles()
    story = [
        Paragraph(html.escape(settings.COMPANY_NAME), s["company"]),
        Paragraph("QUOTATION", s["title"]),
        Paragraph(f"<b>Quotation #:</b> {_text(quotation.get('quotation_number') or quotation.get('id'))}", s["normal"]),
        Paragraph(f"<b>Date:</b> {_display_date(quotation.get('date') or quotation.get('created_at'))}", s["normal"]),
        Paragraph("Client Details", s["heading"]),
        Paragraph(f"<b>Company:</b> {_text(quotation.get('client_name'))}", s["normal"]),
        Paragraph(f"<b>Contact Person:</b> {_text(quotation.get('contact_person'))}", s["normal"]),
        Paragraph(f"<b>Email:</b> {_text(quotation.get('email'))}", s["normal"]),
        Paragraph(f"<b>Phone:</b> {_text(quotation.get('phone'))}", s["normal"]),
    ]

    if quotation.get("course_name") or quotation.get("participants") or quotation.get("duration"):
        story.append(Paragraph("Training Details", s["heading"]))
        story.append(Paragraph(f"<b>Course:</b> {_text(quotation.get('course_name'))}", s["normal"]))
        story.append(Paragraph(f"<b>Number of Participants:</b> {_text(quotation.get('participants'))}", s["normal"]))
        story.append(Paragraph(f"<b>Duration:</b> {_text(quotation.get('duration'))} days", s["normal"]))

    story.append(Paragraph("Financial Details", s["heading"]))
    rows = [["Item Type", "Description", "Cost", "Qty", "Total"]]
    for item in quotation.get("items") or []:
        rows.append([
            Paragraph(_text(item.get("category")), s["small"]),
            Paragraph(_text(item.get("description")), s["small"]),
            _money(item.get("cost")),
            _text(item.get("quantity")),
            _money(item.get("total")),
        ])
    rows.append(["", "", "", "Subtotal", _money(quotation.get("subtotal"))])
    rows.append(["", "", "", f"GST ({settings.GST_RATE * 100:g}%)", _money(quotation.get("gst"))])
    rows.append(["", "", "", "Total", _money(quotation.get("total"))])

    table = Table(rows, colWidths=[1.4 * inch, 2.4 * inch, 1.1 * inch, 0.7 * inch, 1.2 * inch])
    table_style = _table_style()
    table_style.add('FONTNAME', (3, -1), (-1, -1), 'Helvetica-Bold')
    table.setStyle(table_style)
    story.append(table)

    if quotation.get("notes"):
        story.append(Paragraph("Additional Notes", s["heading"]))
        story.append(Paragraph(_text(quotation["notes"]), s["normal"]))

    story.append(Paragraph("Terms and Conditions", s["heading"]))
    terms = [
        f"1. This quotation is valid for {settings.QUOTATION_VALID_DAYS} days from the date of issue.",
        "2. Payment terms: 50% advance payment required to confirm the booking.",
        "3. Cancellation policy: Cancellations made less than 7 days before the training date will incur a 25% fee.",
    ]
    for term in terms:
        story.append(Paragraph(term, s["small"]))

    return _build(story)


def generate_purchase_order_pdf(po: Dict[str, Any], trainer: Optional[Dict[str, Any]] = None) -> bytes:
    """Render a trainer purchase order as an A4 PDF and return its bytes."""
    s = _styles()
    trainer = trainer or {}
    story = [
        Paragraph(html.escape(settings.COMPANY_NAME), s["company"]),
        Paragraph("PURCHASE ORDER", s["title"]),
        Paragraph(f"<b>PO Number:</b> {_text(po.get('po_number'))}", s["normal"]),
        Paragraph(f"<b>PO Date:</b> {_display_date(po.get('po_date') or po.get('created_at'))}", s["normal"]),
        Paragraph(f"<b>Order Reference:</b> {_text(po.get('order_id'))}", s["normal"]),
        Paragraph("Trainer", s["heading"]),
        Paragraph(f"<b>Name:</b> {_text(trainer.get('name'))}", s["normal"]),
        Paragraph(f"<b>Email:</b> {_text(trainer.get('email'))}", s["normal"]),
        Paragraph(f"<b>Phone:</b> {_text(trainer.get('phone'))}", s["normal"]),
        Paragraph("Engagement", s["heading"]),
    ]

    rows = [
        ["Start Date", "End Date", "Days", "Daily Rate", "Total Amount"],
        [
            _text(po.get("start_date")),
            _text(po.get("end_date")),
            _text(po.get("days")),
            _money(po.get("daily_rate")),
            _money(po.get("total_amount")),
        ],
    ]
    table = Table(rows, colWidths=[1.3 * inch, 1.3 * inch, 0.8 * inch, 1.4 * inch, 1.6 * inch])
    table.setStyle(_table_style('#2E75B6'))
    story.append(table)

    if po.get("notes"):
        story.append(Paragraph("Notes", s["heading"]))
        story.append(Paragraph(_text(po["notes"]), s["normal"]))

    story.append(Spacer(1, 0.3 * inch))
    story.append(Paragraph("Please confirm your acceptance of this purchase order.", s["small"]))

    return _build(story)
