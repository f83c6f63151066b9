import logging
import smtplib
import ssl
from email.message import EmailMessage
from email.utils import formataddr

from landing.config import settings

logger = logging.getLogger(__name__)


class Mailer:
    def __init__(self):
        self.enabled = settings.email_enabled
        self.host = settings.email_smtp_host
        self.port = settings.email_smtp_port
        self.user = settings.email_smtp_username
        self.passwd = settings.email_smtp_password
        self.use_ssl = settings.smtp_implicit_tls
        self.use_starttls = settings.email_smtp_starttls

    def send(
        self,
        subject: str,
        html: str,
        to_addr: str,
        from_addr: str | None = None,
        reply_to: str | None = None,
    ) -> None:
        """Deliver an HTML message. Transport errors propagate to the caller."""
        if not self.enabled:
            logger.info("Email disabled; skipping %r to %s", subject, to_addr)
            return

        msg = EmailMessage()
        msg["From"] = formataddr(
            (settings.email_from_name, from_addr or settings.email_from_addr)
        )
        msg["To"] = to_addr
        if reply_to:
            msg["Reply-To"] = reply_to
        msg["Subject"] = subject
        msg.set_content(html, subtype="html")

        if self.use_ssl:
            context = ssl.create_default_context()
            with smtplib.SMTP_SSL(
                self.host, self.port, context=context, timeout=10
            ) as smtp:
                if self.user:
                    smtp.login(self.user, self.passwd)
                smtp.send_message(msg)
            return

        with smtplib.SMTP(self.host, self.port, timeout=10) as smtp:
            if self.use_starttls:
                context = ssl.create_default_context()
                smtp.starttls(context=context)
            if self.user:
                smtp.login(self.user, self.passwd)
            smtp.send_message(msg)


mailer = Mailer()
