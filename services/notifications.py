"""
Email notifications to trainers.
"""
import logging
import smtplib
from email.message import EmailMessage
from typing import Any, Dict, Iterable, Tuple

from core.settings import settings
from utils.formatting import format_currency

logger = logging.getLogger(__name__)

# (filename, content, mime type)
Attachment = Tuple[str, bytes, str]


class EmailNotifier:
    """Sends plain-text mail over SMTP. Never raises; returns whether the mail went out."""

    def __init__(self, config=None):
        self.config = config or settings

    def send(self, to: str, subject: str, body: str, attachments: Iterable[Attachment] = ()) -> bool:
        if not self.config.EMAIL_ENABLED:
            logger.info(f"Email disabled, not sending '{subject}' to {to or '-'}")
            return False
        if not to:
            logger.warning(f"No recipient for '{subject}', email skipped")
            return False

        message = EmailMessage()
        message["From"] = self.config.EMAIL_FROM or self.config.EMAIL_USER
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)

        for filename, content, mime_type in attachments:
            maintype, subtype = mime_type.split("/", 1)
            message.add_attachment(content, maintype=maintype, subtype=subtype, filename=filename)

        try:
            with smtplib.SMTP(self.config.EMAIL_HOST, self.config.EMAIL_PORT, timeout=30) as smtp:
                if self.config.EMAIL_USE_TLS:
                    smtp.starttls()
                if self.config.EMAIL_USER:
                    smtp.login(self.config.EMAIL_USER, self.config.EMAIL_PASSWORD)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email '{subject}' to {to}: {e}", exc_info=True)
            return False

        logger.info(f"Email '{subject}' sent to {to}")
        return True


def build_trainer_po_email(trainer: Dict[str, Any], po: Dict[str, Any]) -> Tuple[str, str]:
    subject = f"Purchase Order {po['po_number']}"
    lines = [
        f"Dear {trainer.get('name') or 'Trainer'},",
        "",
        f"Please find attached the Purchase Order ({po['po_number']}) for the upcoming training.",
        "",
        "Training Details:",
        f"- Start Date: {po['start_date']}",
        f"- End Date: {po['end_date']}",
        f"- Days: {po['days']}",
        f"- Daily Rate: {format_currency(po['daily_rate'])}",
        f"- Total Amount: {format_currency(po['total_amount'])}",
        "",
        f"Notes: {po.get('notes') or 'N/A'}",
        "",
        "Please confirm your acceptance of this PO.",
        "",
        "Best regards,",
        settings.COMPANY_NAME,
    ]
    return subject, "\n".join(lines)


def build_training_confirmation_email(training: Dict[str, Any]) -> Tuple[str, str]:
    subject = "New Training Registration Confirmed"
    lines = [
        "New Training Registration Confirmed",
        "",
        "Details:",
        f"Client: {training.get('client_name')}",
        f"Training Type: {training.get('training_type')}",
        f"Start Date: {training.get('start_date')}",
        f"End Date: {training.get('end_date')}",
        f"Trainer: {training.get('trainer') or 'TBD'}",
    ]
    return subject, "\n".join(lines)
