"""
PDF generation for the printable menu.
"""
from io import BytesIO
import logging
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer

from venue_menu.models.menu_item import AlcoholItem, FoodItem
from venue_menu.models.venue_settings import VenueSettings
from venue_menu.services.menu_view import (
    Bucket,
    MenuFilters,
    MenuView,
    build_public_view,
    format_amount,
    present_prices,
)

logger = logging.getLogger(__name__)

_HEADER_BG = colors.HexColor('#2c3e50')
_STRIPE_BG = colors.HexColor('#f7f9fb')


class MenuPDFService:
    """Service for rendering the available menu as a PDF document."""

    def __init__(self, currency_symbol: str) -> None:
        self._symbol = currency_symbol
        self._styles = getSampleStyleSheet()

    def _bucket_table(self, bucket: Bucket, view: MenuView) -> Table:
        if view is MenuView.FOOD:
            rows = [['Item', 'Veg', 'Price']]
            for item in bucket.items:
                name = item.name
                if item.description:
                    name = f"{name}\n{item.description}"
                rows.append([
                    name,
                    'Veg' if item.vegetarian else 'Non-veg',
                    format_amount(item.price, self._symbol),
                ])
            col_widths = [4.2 * inch, 1 * inch, 1.3 * inch]
        else:
            rows = [['Item', 'Brand', 'Prices']]
            for item in bucket.items:
                prices = present_prices(item, self._symbol)
                rows.append([
                    item.name,
                    item.brand or '-',
                    "  ".join(f"{p.label} {p.display}" for p in prices) or '-',
                ])
            col_widths = [2.4 * inch, 1.6 * inch, 2.5 * inch]

        table = Table(rows, colWidths=col_widths, repeatRows=1, hAlign='LEFT')
        style = TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), _HEADER_BG),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.whitesmoke),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, 0), 9),
            ('BOTTOMPADDING', (0, 0), (-1, 0), 8),

            ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
            ('FONTSIZE', (0, 1), (-1, -1), 8),
            ('VALIGN', (0, 1), (-1, -1), 'TOP'),
            ('ALIGN', (-1, 1), (-1, -1), 'RIGHT'),

            ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
        ])
        for i in range(2, len(rows), 2):
            style.add('BACKGROUND', (0, i), (-1, i), _STRIPE_BG)
        table.setStyle(style)
        return table

    def generate_menu(
        self,
        food: list[FoodItem],
        alcohol: list[AlcoholItem],
        venue: Optional[VenueSettings] = None,
    ) -> BytesIO:
        """
        Render the public menu: available items only, grouped by category.

        Args:
            food: Food items (any availability; unavailable ones are skipped)
            alcohol: Alcohol items (same)
            venue: Venue settings for the title and contact footer

        Returns:
            BytesIO buffer containing the PDF
        """
        logger.info("Generating menu PDF food=%s alcohol=%s", len(food), len(alcohol))

        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=0.6 * inch,
            leftMargin=0.6 * inch,
            topMargin=0.6 * inch,
            bottomMargin=0.6 * inch,
        )
        title_style = self._styles['Title']
        section_style = self._styles['Heading1']
        bucket_style = self._styles['Heading3']
        normal_style = self._styles['Normal']

        venue = venue or VenueSettings()
        elements = [Paragraph(escape(venue.bar_name or "Menu"), title_style)]
        elements.append(Spacer(1, 0.2 * inch))

        for view, heading in ((MenuView.FOOD, "Food"), (MenuView.DRINKS, "Drinks")):
            result = build_public_view(food, alcohol, view, MenuFilters())
            elements.append(Paragraph(heading, section_style))
            if not result.buckets:
                elements.append(Paragraph("Nothing available right now.", normal_style))
                elements.append(Spacer(1, 0.2 * inch))
                continue
            for bucket in result.buckets:
                elements.append(Paragraph(escape(bucket.title), bucket_style))
                elements.append(self._bucket_table(bucket, view))
                elements.append(Spacer(1, 0.15 * inch))

        contact = [v for v in (venue.address, venue.phone, venue.email, venue.hours) if v]
        if contact:
            elements.append(Spacer(1, 0.3 * inch))
            elements.append(Paragraph(escape(" | ".join(contact)), normal_style))

        doc.build(elements)
        buffer.seek(0)

        logger.info("Menu PDF generated successfully")
        return buffer
