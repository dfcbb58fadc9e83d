"""
SMTP notification sender.

Delivers password reset and welcome e-mails through aiosmtplib.
"""

import logging
from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape
from typing import Optional

import aiosmtplib

from src.app.services.notification_sender import INotificationSender

logger = logging.getLogger(__name__)


class SmtpNotificationSender(INotificationSender):
    """
    SMTP-backed notification channel.

    The channel counts as configured only when host, user and password are
    all present; otherwise nothing is sent and send_password_reset() reports
    False.
    """

    def __init__(
        self,
        host: Optional[str] = None,
        port: int = 587,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        from_email: Optional[str] = None,
        app_name: str = "CodeReview.ai",
        frontend_url: str = "http://localhost:5173",
        timeout: float = 10.0,
    ):
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._from_email = from_email or username or "noreply@codereview.ai"
        self._app_name = app_name
        self._frontend_url = frontend_url.rstrip("/")
        self._timeout = timeout

        if not self.is_configured():
            logger.warning("Email not configured: SMTP_HOST, SMTP_USER and SMTP_PASSWORD required")

    @classmethod
    def from_config(cls, config) -> "SmtpNotificationSender":
        return cls(
            host=config.SMTP_HOST,
            port=config.SMTP_PORT,
            username=config.SMTP_USER,
            password=config.SMTP_PASSWORD,
            use_tls=config.SMTP_USE_TLS,
            from_email=config.EMAIL_FROM,
            app_name=config.APP_NAME,
            frontend_url=config.FRONTEND_URL,
            timeout=config.NOTIFICATION_TIMEOUT_SECONDS,
        )

    def is_configured(self) -> bool:
        return bool(self._host and self._username and self._password)

    async def send_password_reset(self, email: str, link: str) -> bool:
        subject = f"Reset Your Password - {self._app_name}"
        safe_link = escape(link, quote=True)
        html = f"""\
<!DOCTYPE html>
<html>
<body style="font-family: -apple-system, 'Segoe UI', Roboto, Helvetica, Arial, sans-serif;">
  <h2>Reset Your Password</h2>
  <p>We received a request to reset your password. Click the link below to choose a new one.</p>
  <p><a href="{safe_link}">Reset Password</a></p>
  <p>Or paste this link into your browser:<br>{safe_link}</p>
  <p>This link expires in <strong>1 hour</strong>. If you didn't request a reset,
  you can ignore this email and your password will stay unchanged.</p>
  <p style="color: #6e7681; font-size: 12px;">&copy; {datetime.now().year} {escape(self._app_name)}</p>
</body>
</html>
"""
        text = (
            "We received a request to reset your password.\n\n"
            f"Open this link to choose a new one: {link}\n\n"
            "This link expires in 1 hour. If you didn't request a reset, "
            "you can ignore this email."
        )
        return await self._send(email, subject, html, text)

    async def send_welcome(self, email: str, name: str) -> None:
        subject = f"Welcome to {self._app_name}!"
        dashboard = escape(f"{self._frontend_url}/dashboard", quote=True)
        html = f"""\
<!DOCTYPE html>
<html>
<body style="font-family: -apple-system, 'Segoe UI', Roboto, Helvetica, Arial, sans-serif;">
  <h2>Welcome, {escape(name)}!</h2>
  <p>Your account has been created. You're ready to get AI-powered code reviews.</p>
  <p><a href="{dashboard}">Go to Dashboard</a></p>
  <p style="color: #6e7681; font-size: 12px;">&copy; {datetime.now().year} {escape(self._app_name)}</p>
</body>
</html>
"""
        text = (
            f"Welcome, {name}!\n\n"
            "Your account has been created. You're ready to get AI-powered code reviews.\n"
            f"{self._frontend_url}/dashboard"
        )
        try:
            await self._send(email, subject, html, text)
        except Exception:
            logger.exception("Welcome email could not be sent")

    async def _send(self, to: str, subject: str, html: str, text: str) -> bool:
        if not self.is_configured():
            logger.info("Email channel not configured, skipping '%s'", subject)
            return False

        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = f'"{self._app_name}" <{self._from_email}>'
        message["To"] = to
        message.attach(MIMEText(text, "plain"))
        message.attach(MIMEText(html, "html"))

        # Implicit TLS on 465, STARTTLS elsewhere
        implicit_tls = self._port == 465

        try:
            await aiosmtplib.send(
                message,
                hostname=self._host,
                port=self._port,
                username=self._username,
                password=self._password,
                use_tls=implicit_tls,
                start_tls=self._use_tls and not implicit_tls,
                timeout=self._timeout,
            )
        except (aiosmtplib.SMTPException, OSError) as exc:
            logger.error("Failed to send '%s': %s", subject, exc)
            return False

        logger.info("Email '%s' sent", subject)
        return True
