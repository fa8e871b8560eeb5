"""SMTP email dispatch for finished summaries."""

import asyncio
import logging
import smtplib
import ssl
from collections.abc import Sequence
from datetime import date
from email.message import EmailMessage
from email.utils import formataddr
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from meetscribe.config import get_settings
from meetscribe.errors import EmailError, ValidationError

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

_templates = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
)


def has_line_break(value: str) -> bool:
    """Header values may not span lines."""
    return "\r" in value or "\n" in value


def format_generated_on(day: date) -> str:
    """Format the footer date, e.g. 'October 17, 2026'."""
    return f"{day:%B} {day.day}, {day.year}"


def render_summary_email(
    summary_html: str,
    message: str | None = None,
    app_name: str = "AI Meeting Summarizer",
    generated_on: date | None = None,
) -> str:
    """Wrap summary HTML and an optional personal message in the email layout.

    The summary markup is inserted verbatim; the message is escaped.
    """
    template = _templates.get_template("summary_email.html")
    return template.render(
        summary_html=summary_html,
        message=message,
        app_name=app_name,
        generated_on=format_generated_on(generated_on or date.today()),
    )


class EmailDispatcher:
    """Sends one formatted summary email through the configured SMTP server."""

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool | None = None,
        from_name: str | None = None,
    ) -> None:
        """Initialize dispatcher, defaulting every field to config."""
        settings = get_settings()
        self.host = host or settings.smtp_host
        self.port = port or settings.smtp_port
        self.username = username if username is not None else settings.smtp_user
        self.password = password if password is not None else settings.smtp_pass
        self.use_tls = use_tls if use_tls is not None else settings.smtp_use_tls
        self.from_name = from_name or settings.email_from_name

    def build_message(
        self,
        recipients: Sequence[str],
        subject: str,
        message: str | None,
        summary_html: str,
    ) -> EmailMessage:
        """Build the MIME message.

        All recipients share one To header and therefore see each other.
        """
        msg = EmailMessage()
        msg["From"] = formataddr((self.from_name, self.username or "no-reply@localhost"))
        msg["To"] = ", ".join(recipients)
        msg["Subject"] = subject
        msg.set_content(
            "This email contains an HTML meeting summary. "
            "Open it in a mail client that displays HTML."
        )
        msg.add_alternative(
            render_summary_email(summary_html, message, app_name=self.from_name),
            subtype="html",
        )
        return msg

    def _deliver(self, msg: EmailMessage) -> None:
        """Blocking SMTP session: connect, upgrade, authenticate, submit."""
        if self.port == 465:
            server: smtplib.SMTP = smtplib.SMTP_SSL(
                self.host, self.port, context=ssl.create_default_context()
            )
        else:
            server = smtplib.SMTP(self.host, self.port)

        with server:
            server.ehlo()
            if self.use_tls and self.port != 465 and server.has_extn("starttls"):
                server.starttls(context=ssl.create_default_context())
                server.ehlo()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(msg)

    async def send(
        self,
        recipients: Sequence[str],
        subject: str,
        message: str | None,
        summary_html: str,
    ) -> None:
        """Send the summary to all recipients in a single message.

        Resolves once the SMTP server accepts the message. Single attempt.

        Raises:
            ValidationError: No recipients, blank or multi-line subject
            EmailError: Unbuildable message, connection, authentication or
                recipient rejection
        """
        if not recipients:
            raise ValidationError("At least one recipient is required")
        if not subject.strip():
            raise ValidationError("Email subject is required")
        if has_line_break(subject):
            raise ValidationError("Email subject must be a single line")

        try:
            msg = self.build_message(recipients, subject, message, summary_html)
        except ValueError as e:
            logger.error(f"Could not build summary email: {e}")
            raise EmailError(f"Failed to send email: {e}") from e

        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {len(recipients)} recipient(s): {e}")
            raise EmailError(f"Failed to send email: {e}") from e

        logger.info(f"Sent summary email to {len(recipients)} recipient(s)")
