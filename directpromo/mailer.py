"""Email notifications for submitted orders and contact messages.

Payloads reaching this module are already sanitized, so values are
interpolated into the HTML bodies as-is.
"""
from __future__ import annotations
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Optional, Protocol

import structlog

from directpromo.errors import MailDeliveryError
from directpromo.schemas import ContactMessage, OrderPayload
from directpromo.settings import Settings

logger = structlog.get_logger()


@dataclass(frozen=True)
class LogoAttachment:
    filename: str
    content_type: str
    data: bytes


class Mailer(Protocol):
    def send_order_notification(self, order: OrderPayload, logo: Optional[LogoAttachment] = None) -> None: ...

    def send_contact_notification(self, message: ContactMessage) -> None: ...



# Templates
def money(amount: float) -> str:
    return f"${amount:.2f}"


def render_item_rows(order: OrderPayload) -> str:
    rows = []
    for item in order.cart_items:
        rows.append(
            "<tr>"
            f"<td>{item.name}</td>"
            f"<td>{item.selected_color}</td>"
            f"<td>{item.quantity}</td>"
            f"<td>{money(item.line_total)}</td>"
            "</tr>"
        )
        for size in item.size_breakdown:
            rows.append(
                "<tr>"
                '<td colspan="2"></td>'
                f"<td>Size {size.size}</td>"
                f"<td>{size.quantity} units</td>"
                "</tr>"
            )
    return "\n".join(rows)


def _items_table(order: OrderPayload, price_heading: str, total_label: str) -> str:
    return f"""
<table border="1" cellpadding="5" style="border-collapse: collapse;">
  <tr><th>Product</th><th>Color</th><th>Quantity</th><th>{price_heading}</th></tr>
  {render_item_rows(order)}
  <tr>
    <td colspan="3" style="text-align: right;"><strong>{total_label}:</strong></td>
    <td><strong>{money(order.total_amount)}</strong></td>
  </tr>
</table>"""


def render_admin_order_email(order: OrderPayload, has_logo: bool = False) -> str:
    logo_line = "<p><strong>Logo:</strong> Attached to this email</p>" if has_logo else ""
    return f"""
<h2>New Order Received</h2>

<h3>Customer Information:</h3>
<p><strong>Name:</strong> {order.first_name} {order.last_name}</p>
<p><strong>Email:</strong> {order.email}</p>
<p><strong>Phone:</strong> {order.phone}</p>
<p><strong>Company:</strong> {order.company}</p>

<h3>Order Details:</h3>
{_items_table(order, "Price", "Total")}

<p><strong>Additional Notes:</strong> {order.notes or "None"}</p>
{logo_line}
<p style="color: #666; font-style: italic;">This is an automated notification. Please review the order details in your admin dashboard.</p>
"""


def render_customer_order_email(order: OrderPayload) -> str:
    return f"""
<h2>Thank you for your order!</h2>
<p>We have received your order request and will contact you shortly with a detailed quote.</p>

<h3>Order Summary:</h3>
{_items_table(order, "Estimated Price", "Estimated Total")}

<p><em>Note: Final pricing may vary based on customization options and quantity.</em></p>

<p>If you have any questions, please don't hesitate to contact us.</p>

<p>Best regards,<br>The DirectPromo Team</p>
"""


def render_contact_email(message: ContactMessage) -> str:
    body = message.message.replace("\n", "<br>")
    return f"""
<h2>New Contact Form Submission</h2>
<p><strong>Company:</strong> {message.company}</p>
<p><strong>Name:</strong> {message.name}</p>
<p><strong>Email:</strong> {message.email}</p>
<p><strong>Phone:</strong> {message.phone or "N/A"}</p>
<p><strong>Message:</strong></p>
<p>{body}</p>
"""



# SMTP transport
class SmtpMailer:
    def __init__(self, settings: Settings):
        self.settings = settings

    def _message(self, sender: str, to: str, subject: str, html: str, reply_to: Optional[str] = None) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = sender
        msg["To"] = to
        msg["Subject"] = subject
        if reply_to:
            msg["Reply-To"] = reply_to
        msg.set_content(html, subtype="html")
        return msg

    def _deliver(self, *messages: EmailMessage) -> None:
        s = self.settings
        recipient = ", ".join(str(m["To"]) for m in messages)
        try:
            with smtplib.SMTP(s.SMTP_HOST, s.SMTP_PORT, timeout=s.SMTP_TIMEOUT) as smtp:
                if s.SMTP_STARTTLS:
                    smtp.starttls()
                if s.SMTP_USER:
                    smtp.login(s.SMTP_USER, s.SMTP_PASS or "")
                for msg in messages:
                    smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("mail_send_failed", recipient=recipient, error=str(e))
            raise MailDeliveryError(recipient, str(e)) from e
        logger.info("mail_sent", recipient=recipient, count=len(messages))

    def send_order_notification(self, order: OrderPayload, logo: Optional[LogoAttachment] = None) -> None:
        admin = self._message(
            f'"DirectPromo Orders" <{self.settings.EMAIL_FROM}>',
            self.settings.EMAIL_TO,
            "New Order Received - DirectPromo",
            render_admin_order_email(order, has_logo=logo is not None),
        )
        customer = self._message(
            f'"DirectPromo" <{self.settings.EMAIL_FROM}>',
            order.email,
            "Order Confirmation - DirectPromo",
            render_customer_order_email(order),
        )
        if logo is not None:
            maintype, _, subtype = logo.content_type.partition("/")
            admin.add_attachment(logo.data, maintype=maintype, subtype=subtype or "octet-stream", filename=logo.filename)
        self._deliver(admin, customer)

    def send_contact_notification(self, message: ContactMessage) -> None:
        msg = self._message(
            f'"DirectPromo Contact Form" <{self.settings.EMAIL_FROM}>',
            self.settings.EMAIL_TO,
            f"New Contact Form Submission from {' '.join(message.company.split())}",
            render_contact_email(message),
            reply_to=message.email,
        )
        self._deliver(msg)
