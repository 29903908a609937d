"""
PDF Generation Service.
Renders the invoice/quote preview as a PDF document using ReportLab.
"""

from datetime import date
from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Paragraph,
    Spacer,
    Table,
    TableStyle,
)
from reportlab.lib.enums import TA_RIGHT

from invoice_desk.models.invoice import InvoiceType
from invoice_desk.schemas.invoice import InvoicePreview
from invoice_desk.services.calculations import format_money


class PDFService:
    """Service for exporting invoice previews as PDF."""

    def __init__(self):
        # Colors
        self.primary_color = colors.HexColor("#2563EB")  # Blue
        self.quote_color = colors.HexColor("#059669")  # Green
        self.secondary_color = colors.HexColor("#1E40AF")  # Dark blue
        self.gray_color = colors.HexColor("#6B7280")
        self.light_gray = colors.HexColor("#F3F4F6")
        self.border_color = colors.HexColor("#E5E7EB")

    def _get_styles(self, accent):
        """Get custom paragraph styles."""
        styles = getSampleStyleSheet()

        styles.add(ParagraphStyle(
            name='InvoiceTitle',
            parent=styles['Heading1'],
            fontSize=24,
            textColor=accent,
            alignment=TA_RIGHT,
            spaceAfter=6*mm,
        ))
        styles.add(ParagraphStyle(
            name='Subtitle',
            parent=styles['Normal'],
            fontSize=10,
            textColor=self.gray_color,
            alignment=TA_RIGHT,
        ))
        styles.add(ParagraphStyle(
            name='SectionHeader',
            parent=styles['Heading2'],
            fontSize=12,
            textColor=self.secondary_color,
            spaceBefore=4*mm,
            spaceAfter=2*mm,
        ))
        styles.add(ParagraphStyle(
            name='NormalText',
            parent=styles['Normal'],
            fontSize=10,
            textColor=colors.black,
        ))
        styles.add(ParagraphStyle(
            name='SmallText',
            parent=styles['Normal'],
            fontSize=8,
            textColor=self.gray_color,
        ))
        styles.add(ParagraphStyle(
            name='RightAlign',
            parent=styles['Normal'],
            fontSize=10,
            alignment=TA_RIGHT,
        ))
        styles.add(ParagraphStyle(
            name='Bold',
            parent=styles['Normal'],
            fontSize=10,
            fontName='Helvetica-Bold',
        ))

        return styles

    def _format_date(self, d: date | None) -> str:
        return d.strftime("%b %d, %Y") if d else ""

    def _text(self, value: str | None) -> str:
        """Escape user text for ReportLab markup, keeping line breaks."""
        return escape(value or "").replace("\n", "<br/>")

    async def generate_preview_pdf(self, preview: InvoicePreview) -> bytes:
        """
        Generate the PDF document of a preview snapshot.

        Args:
            preview: Invoice or quote snapshot with computed totals

        Returns:
            PDF file content
        """
        accent = self.quote_color if preview.invoice_type == InvoiceType.QUOTE else self.primary_color
        styles = self._get_styles(accent)

        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20*mm,
            leftMargin=20*mm,
            topMargin=20*mm,
            bottomMargin=20*mm,
            title=f"{preview.title.title()} {preview.invoice_number}",
        )

        elements = []

        # ===== HEADER =====
        company = preview.company
        header_data = [
            [
                Paragraph(f"<b>{self._text(company.company_name if company else '')}</b>", styles['Bold']),
                Paragraph(f"<b>{preview.title}</b>", styles['InvoiceTitle']),
            ],
            [
                Paragraph(self._text(company.company_address if company else ""), styles['SmallText']),
                Paragraph(f"# {self._text(preview.invoice_number)}", styles['Subtitle']),
            ],
            [
                Paragraph(self._text(company.company_phone if company else ""), styles['SmallText']),
                Paragraph(f"Date: {self._format_date(preview.invoice_date)}", styles['Subtitle']),
            ],
            [
                Paragraph(self._text(company.company_email if company else ""), styles['SmallText']),
                Paragraph(
                    f"Due: {self._format_date(preview.due_date)}" if preview.due_date else "",
                    styles['Subtitle'],
                ),
            ],
        ]

        header_table = Table(header_data, colWidths=[95*mm, 75*mm])
        header_table.setStyle(TableStyle([
            ('VALIGN', (0, 0), (-1, -1), 'TOP'),
            ('ALIGN', (1, 0), (1, -1), 'RIGHT'),
        ]))
        elements.append(header_table)
        elements.append(Spacer(1, 10*mm))

        # ===== CLIENT INFO =====
        elements.append(Paragraph("BILL TO", styles['SectionHeader']))
        client_info = f"<b>{self._text(preview.client_name)}</b>"
        if preview.client_address:
            client_info += f"<br/>{self._text(preview.client_address)}"
        if preview.client_email:
            client_info += f"<br/>{self._text(preview.client_email)}"
        elements.append(Paragraph(client_info, styles['NormalText']))
        elements.append(Spacer(1, 8*mm))

        # ===== LINE ITEMS TABLE =====
        items_data = [
            [
                Paragraph("<b>Description</b>", styles['Bold']),
                Paragraph("<b>Qty</b>", styles['Bold']),
                Paragraph("<b>Rate</b>", styles['Bold']),
                Paragraph("<b>Amount</b>", styles['Bold']),
            ]
        ]
        for item in preview.line_items:
            items_data.append([
                Paragraph(self._text(item.description), styles['NormalText']),
                Paragraph(f"{item.quantity.normalize():f}", styles['RightAlign']),
                Paragraph(format_money(item.rate), styles['RightAlign']),
                Paragraph(format_money(item.amount), styles['RightAlign']),
            ])

        items_table = Table(
            items_data,
            colWidths=[85*mm, 25*mm, 30*mm, 35*mm],
            repeatRows=1,
        )
        items_table.setStyle(TableStyle([
            # Header style
            ('BACKGROUND', (0, 0), (-1, 0), accent),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('BOTTOMPADDING', (0, 0), (-1, 0), 4*mm),
            ('TOPPADDING', (0, 0), (-1, 0), 4*mm),

            # Body style
            ('BOTTOMPADDING', (0, 1), (-1, -1), 3*mm),
            ('TOPPADDING', (0, 1), (-1, -1), 3*mm),
            ('ALIGN', (1, 0), (-1, -1), 'RIGHT'),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),

            # Borders
            ('LINEBELOW', (0, 1), (-1, -2), 0.5, self.border_color),
            ('LINEBELOW', (0, -1), (-1, -1), 1, self.border_color),

            # Alternating row colors
            *[('BACKGROUND', (0, i), (-1, i), self.light_gray)
              for i in range(2, len(items_data), 2)],
        ]))
        elements.append(items_table)
        elements.append(Spacer(1, 6*mm))

        # ===== TOTALS =====
        totals_data = [["Subtotal", format_money(preview.subtotal)]]
        if preview.tax_enabled:
            totals_data.append([f"GST ({preview.tax_rate.normalize():f}%)", format_money(preview.tax_amount)])
        totals_data.append(["Total", format_money(preview.total)])

        totals_table = Table(totals_data, colWidths=[130*mm, 45*mm])
        totals_table.setStyle(TableStyle([
            ('ALIGN', (0, 0), (-1, -1), 'RIGHT'),
            ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 10),
            ('TOPPADDING', (0, 0), (-1, -1), 2*mm),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 2*mm),
            ('LINEABOVE', (0, -1), (-1, -1), 1, accent),
            ('BACKGROUND', (0, -1), (-1, -1), self.light_gray),
        ]))
        elements.append(totals_table)
        elements.append(Spacer(1, 10*mm))

        # ===== TERMS & NOTES =====
        if preview.payment_terms:
            elements.append(Paragraph("PAYMENT TERMS", styles['SectionHeader']))
            elements.append(Paragraph(self._text(preview.payment_terms), styles['NormalText']))
            elements.append(Spacer(1, 4*mm))

        if preview.notes:
            elements.append(Paragraph("NOTES", styles['SectionHeader']))
            elements.append(Paragraph(self._text(preview.notes), styles['SmallText']))

        doc.build(elements)
        return buffer.getvalue()
