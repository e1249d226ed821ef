"""Invoice generation.

Invoices are rendered from an order's snapshot prices with ReportLab and
cached under ``SHOP["INVOICE_ROOT"]`` as ``invoice-<order id>.pdf``.
Orders never change, so a cached file is served as is.
"""

import io
import logging
import os
import tempfile
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path

from reportlab.lib.pagesizes import letter
from reportlab.lib.units import inch
from reportlab.pdfgen import canvas

from shopfront.core.conf import get_invoice_root
from shopfront.core.permissions import check_owner

from .orders import get_order

logger = logging.getLogger(__name__)

DIVIDER = "-" * 32

TITLE_FONT = ("Helvetica-Bold", 26)
BODY_FONT = ("Helvetica", 14)
TOTAL_FONT = ("Helvetica-Bold", 20)
MARGIN = inch


@dataclass
class Invoice:
    """A rendered invoice ready to stream."""

    order_id: str
    filename: str
    path: Path
    content: bytes
    total: Decimal
    stored: bool
    cached: bool = False


def format_amount(amount: Decimal) -> str:
    """Render a currency amount with two decimal places."""
    return str(Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def invoice_total(order) -> Decimal:
    """Sum of quantity x snapshot price over the order's items."""
    return sum(
        (item.price * item.quantity for item in order.items.all()),
        Decimal("0.00"),
    )


def invoice_lines(order) -> list[str]:
    """The text of an invoice, one entry per printed line."""
    lines = ["Invoice", DIVIDER]
    for item in order.items.all():
        lines.append(f"{item.title} - {item.quantity} x ${format_amount(item.price)}")
    lines.append(DIVIDER)
    lines.append(f"Total Price: ${format_amount(invoice_total(order))}")
    return lines


def invoice_filename(order_id) -> str:
    return f"invoice-{order_id}.pdf"


def invoice_path(order_id) -> Path:
    return get_invoice_root() / invoice_filename(order_id)


def render_invoice_pdf(order) -> bytes:
    """Draw the invoice lines onto a letter-sized PDF."""
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=letter)
    pdf.setTitle(f"Invoice {order.pk}")
    width, height = letter

    title, *body, total_line = invoice_lines(order)

    y = height - MARGIN
    pdf.setFont(*TITLE_FONT)
    pdf.drawString(MARGIN, y, title)
    title_width = pdf.stringWidth(title, *TITLE_FONT)
    pdf.line(MARGIN, y - 4, MARGIN + title_width, y - 4)
    y -= TITLE_FONT[1] + 10

    pdf.setFont(*BODY_FONT)
    for line in body:
        if y < MARGIN:
            pdf.showPage()
            pdf.setFont(*BODY_FONT)
            y = height - MARGIN
        pdf.drawString(MARGIN, y, line)
        y -= BODY_FONT[1] + 6

    if y < MARGIN:
        pdf.showPage()
        y = height - MARGIN
    pdf.setFont(*TOTAL_FONT)
    pdf.drawString(MARGIN, y - 6, total_line)

    pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def store_invoice(path: Path, content: bytes) -> bool:
    """Write ``content`` to ``path`` atomically. Returns False on failure."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(content)
            os.replace(tmp_name, path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
    except OSError:
        logger.exception("Could not store invoice at %s", path)
        return False
    return True


def load_cached_invoice(path: Path):
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None
    except OSError:
        logger.exception("Could not read cached invoice %s", path)
        return None


def generate_invoice(order_id, requesting_user) -> Invoice:
    """Build (or load from cache) the invoice PDF for an order.

    Args:
        order_id: Order primary key
        requesting_user: The user asking for the invoice

    Returns:
        Invoice with the PDF bytes. ``stored`` is False when the copy on
        disk could not be written; the PDF itself is still usable.

    Raises:
        NotFoundError: No such order
        AuthorizationError: The order belongs to someone else
    """
    order = get_order(order_id)
    check_owner(order.user_id, requesting_user, "order")

    path = invoice_path(order.pk)
    filename = invoice_filename(order.pk)
    total = invoice_total(order)

    content = load_cached_invoice(path)
    if content is not None:
        return Invoice(
            order_id=str(order.pk),
            filename=filename,
            path=path,
            content=content,
            total=total,
            stored=True,
            cached=True,
        )

    content = render_invoice_pdf(order)
    stored = store_invoice(path, content)
    if stored:
        logger.info("Invoice for order %s written to %s", order.pk, path)

    return Invoice(
        order_id=str(order.pk),
        filename=filename,
        path=path,
        content=content,
        total=total,
        stored=stored,
    )
