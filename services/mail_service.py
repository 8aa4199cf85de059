import logging
import re
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr

from config import Settings, get_settings

logger = logging.getLogger("planner.mail")


@dataclass(frozen=True)
class MailMessage:
    to: str
    subject: str
    html: str


def html_to_text(html: str) -> str:
    text = re.sub(r'<[^>]+>', ' ', html)
    return re.sub(r'\s+', ' ', text).strip()


class MailSender:
    """Sends HTML mail through the configured SMTP server.

    One connection per message; errors from smtplib propagate to the caller.
    """

    def __init__(self, settings: Settings, timeout: float = 10.0):
        self.settings = settings
        self.timeout = timeout

    def build(self, message: MailMessage) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = message.subject
        msg["From"] = formataddr((self.settings.mail_from_name, self.settings.sender_address))
        msg["To"] = message.to
        msg.set_content(html_to_text(message.html))
        msg.add_alternative(message.html, subtype="html")
        return msg

    def send(self, message: MailMessage) -> None:
        msg = self.build(message)
        with smtplib.SMTP(self.settings.smtp_host, self.settings.smtp_port, timeout=self.timeout) as server:
            if self.settings.smtp_use_tls:
                server.starttls()
            server.login(self.settings.smtp_user, self.settings.smtp_password)
            server.send_message(msg)
        logger.info("Mail sent to %s: %s", message.to, message.subject)


def get_mail_sender() -> MailSender:
    return MailSender(get_settings())
