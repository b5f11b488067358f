"""Outbound mail for app-user approval."""

from email.message import EmailMessage

import aiosmtplib

from catalog_admin.config import settings
from catalog_admin.utils import Logger

logger = Logger("email")

SUBJECT = "Your account has been authenticated"

_TEXT = (
    "Hello {name}\n\n"
    "Your app account has been authenticated. You can now sign in and use "
    "all available features.\n\n"
    "If you did not request this, please contact support."
)

_HTML = """\
<div style="font-family: system-ui, sans-serif; line-height: 1.6; color: #111827;">
  <h2>Your account is authenticated</h2>
  <p>Hello {name},</p>
  <p>Your app account has been authenticated. You can now sign in and use all available features.</p>
  <p style="margin-top:24px; color:#6B7280; font-size: 12px;">If you did not request this, please contact support.</p>
</div>"""


class EmailService:
    """Sends mail through the configured SMTP relay."""

    def __init__(self, config=settings):
        self.config = config

    @property
    def is_configured(self) -> bool:
        c = self.config
        return bool(c.smtp_host and c.smtp_username and c.smtp_password)

    def build_authenticated_message(
        self, to: str, first_name: str | None = None, last_name: str | None = None
    ) -> EmailMessage:
        name = " ".join(p for p in (first_name, last_name) if p).strip()
        msg = EmailMessage()
        msg["From"] = self.config.smtp_from_email or self.config.smtp_username
        msg["To"] = to
        msg["Subject"] = SUBJECT
        msg.set_content(_TEXT.format(name=name))
        msg.add_alternative(_HTML.format(name=name), subtype="html")
        return msg

    async def send_authenticated_email(
        self, to: str, first_name: str | None = None, last_name: str | None = None
    ) -> bool:
        """Returns False (and logs) when SMTP is unconfigured or delivery fails."""
        if not self.is_configured:
            logger.warning(f"SMTP not configured; skipping approval email to {to}")
            return False

        message = self.build_authenticated_message(to, first_name, last_name)
        port = self.config.smtp_port
        try:
            await aiosmtplib.send(
                message,
                hostname=self.config.smtp_host,
                port=port,
                username=self.config.smtp_username,
                password=self.config.smtp_password,
                use_tls=port == 465,
                start_tls=port != 465,
            )
        except aiosmtplib.SMTPException as exc:
            logger.error(f"Approval email to {to} failed: {exc}")
            return False
        except OSError as exc:
            logger.error(f"SMTP relay unreachable for {to}: {exc}")
            return False

        logger.info(f"Approval email sent to {to}")
        return True
