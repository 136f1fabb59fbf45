"""
PDF Receipt Generator with QR Code
Black, Taxi Yellow & White Theme
"""
import os
import qrcode  # type: ignore[import-untyped]
import hashlib
import json
from reportlab.lib.pagesizes import A4  # type: ignore[import-untyped]
from reportlab.pdfgen import canvas  # type: ignore[import-untyped]
from reportlab.lib import colors  # type: ignore[import-untyped]
from reportlab.platypus import Table, TableStyle  # type: ignore[import-untyped]
from datetime import datetime
from typing import Optional
import logging

from mytaxy.core.config import settings
from mytaxy.database.models import Receipt

logger = logging.getLogger(__name__)

# Color Theme
BLACK = "#000000"
YELLOW = "#F7C600"  # Taxi yellow
WHITE = "#FFFFFF"
DARK_GRAY = "#1a1a1a"
MID_GRAY = "#2a2a2a"


def _fmt_time(value: Optional[datetime]) -> str:
    return value.strftime("%d %b %Y, %I:%M %p") if value else "-"


def generate_qr_code(data: dict, output_dir: str) -> str:
    """
    Generate QR code with receipt data and checksum
    Returns path to QR code image
    """
    checksum = hashlib.sha256(json.dumps(data, sort_keys=True).encode()).hexdigest()[:16]
    payload = dict(data, checksum=checksum)

    qr = qrcode.QRCode(version=1, box_size=10, border=2)
    qr.add_data(json.dumps(payload))
    qr.make(fit=True)

    qr_img = qr.make_image(fill_color=BLACK, back_color=WHITE)

    qr_path = os.path.join(output_dir, f"qr_{data['receipt_number']}.png")
    qr_img.save(qr_path)

    return qr_path


def generate_receipt_pdf(receipt: Receipt, output_dir: Optional[str] = None) -> str:
    """
    Render a stored receipt to PDF.

    Args:
        receipt: persisted Receipt with its user and captain loaded
        output_dir: target directory, defaults to RECEIPTS_DIR

    Returns:
        Path to generated PDF
    """
    output_dir = output_dir or settings.RECEIPTS_DIR
    os.makedirs(output_dir, exist_ok=True)
    pdf_path = os.path.join(output_dir, f"receipt_{receipt.receipt_number}.pdf")

    try:
        c = canvas.Canvas(pdf_path, pagesize=A4)
        width, height = A4

        # === HEADER ===
        header_height = 90
        c.setFillColor(colors.HexColor(BLACK))
        c.rect(0, height - header_height, width, header_height, fill=1, stroke=0)

        c.setFillColor(colors.HexColor(YELLOW))
        c.setFont("Helvetica-Bold", 26)
        c.drawString(30, height - 50, receipt.company_name)
        c.setFillColor(colors.HexColor(WHITE))
        c.setFont("Helvetica", 10)
        c.drawString(30, height - 70, receipt.company_address)

        c.setFillColor(colors.HexColor(YELLOW))
        c.setFont("Helvetica-Bold", 14)
        c.drawRightString(width - 30, height - 50, receipt.receipt_number)
        c.setFont("Helvetica", 9)
        c.drawRightString(width - 30, height - 65, "RECEIPT NUMBER")

        # === AMOUNT BANNER ===
        y = height - header_height - 60
        c.setFillColor(colors.HexColor(YELLOW))
        c.roundRect(30, y, width - 60, 45, 8, fill=1, stroke=0)
        c.setFillColor(colors.HexColor(BLACK))
        c.setFont("Helvetica-Bold", 18)
        c.drawString(45, y + 16, "TOTAL PAID")
        c.drawRightString(width - 45, y + 16, f"Rs. {receipt.payment_amount:.2f}")

        # === RIDE DETAILS ===
        y -= 30
        c.setFillColor(colors.HexColor(BLACK))
        c.setFont("Helvetica-Bold", 14)
        c.drawString(30, y, "Ride Details")
        c.setStrokeColor(colors.HexColor(YELLOW))
        c.setLineWidth(1)
        c.line(30, y - 5, 160, y - 5)

        ride_rows = [
            ["Pickup:", receipt.pickup_address or "-"],
            ["Destination:", receipt.destination_address or "-"],
            ["Distance:", f"{receipt.distance:.1f} km"],
            ["Duration:", f"{receipt.duration:.0f} min"],
            ["Vehicle:", receipt.vehicle_type or "-"],
            ["Started:", _fmt_time(receipt.start_time)],
            ["Ended:", _fmt_time(receipt.end_time)],
        ]
        y = _draw_table(c, ride_rows, y - 15, width, height)

        # === PAYMENT DETAILS ===
        y -= 30
        c.setFillColor(colors.HexColor(BLACK))
        c.setFont("Helvetica-Bold", 14)
        c.drawString(30, y, "Payment")
        c.line(30, y - 5, 160, y - 5)

        payment_rows = [
            ["Method:", receipt.payment_method.upper()],
            ["Status:", receipt.payment_status.upper()],
            ["Transaction ID:", receipt.payment_transaction_id or "-"],
            ["Paid On:", _fmt_time(receipt.payment_date)],
            ["Rider:", f"{receipt.user.fullname} ({receipt.user.email})"],
            ["Captain:", f"{receipt.captain.fullname} {receipt.captain.vehicle_plate or ''}".strip()],
        ]
        y = _draw_table(c, payment_rows, y - 15, width, height)

        # === QR CODE ===
        qr_path = generate_qr_code(
            {
                "receipt_number": receipt.receipt_number,
                "ride_id": receipt.ride_id,
                "amount": receipt.payment_amount,
                "method": receipt.payment_method,
                "transaction_id": receipt.payment_transaction_id,
            },
            output_dir,
        )
        qr_y = max(y - 170, 110)
        c.drawImage(qr_path, width - 170, qr_y, width=130, height=130, preserveAspectRatio=True)
        c.setFillColor(colors.HexColor(BLACK))
        c.setFont("Helvetica", 8)
        c.drawCentredString(width - 105, qr_y - 10, "Scan to verify this receipt")

        # === FOOTER ===
        c.setFillColor(colors.HexColor(BLACK))
        c.rect(0, 0, width, 60, fill=1, stroke=0)
        c.setFillColor(colors.HexColor(WHITE))
        c.setFont("Helvetica", 8)
        c.drawCentredString(width / 2, 40, f"{receipt.company_email} | {receipt.company_phone} | {receipt.company_gstin}")
        c.drawCentredString(width / 2, 25, f"Generated on: {datetime.now().strftime('%d %b %Y at %I:%M %p')}")

        c.save()

        logger.info(f"Generated receipt PDF: {pdf_path}")
        return pdf_path

    except Exception as e:
        logger.error(f"Error generating PDF: {e}")
        raise


def _draw_table(c, rows, top: float, width: float, height: float) -> float:
    """Draw a two-column detail table below ``top`` and return its bottom y."""
    table = Table(rows, colWidths=[120, width - 180])
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (0, -1), colors.HexColor(DARK_GRAY)),
        ('BACKGROUND', (1, 0), (1, -1), colors.HexColor(MID_GRAY)),
        ('FONT', (0, 0), (0, -1), 'Helvetica-Bold'),
        ('FONT', (1, 0), (1, -1), 'Helvetica'),
        ('FONTSIZE', (0, 0), (-1, -1), 10),
        ('TEXTCOLOR', (0, 0), (0, -1), colors.HexColor(YELLOW)),
        ('TEXTCOLOR', (1, 0), (1, -1), colors.HexColor(WHITE)),
        ('LEFTPADDING', (0, 0), (-1, -1), 10),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
        ('TOPPADDING', (0, 0), (-1, -1), 6),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.HexColor(YELLOW)),
    ]))
    _, table_height = table.wrapOn(c, width, height)
    table.drawOn(c, 30, top - table_height)
    return top - table_height


def get_receipt_url(receipt_id: int, public_base_url: str) -> str:
    """Get public URL for receipt download"""
    return f"{public_base_url.rstrip('/')}/api/receipts/{receipt_id}/receipt.pdf"
