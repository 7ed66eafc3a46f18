"""Email Service 도메인 서비스 레이어입니다. SMTP(aiosmtplib)로 공지 메일을 발송합니다."""

import html
import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import List, Optional

import aiosmtplib

from app.config import settings

logger = logging.getLogger(__name__)


class EmailService:
    """SMTP 설정이 비어 있으면 발송하지 않고 False를 반환한다."""

    def __init__(self):
        self.smtp_host = settings.SMTP_HOST
        self.smtp_port = settings.SMTP_PORT
        self.smtp_user = settings.SMTP_USER
        self.smtp_password = settings.SMTP_PASSWORD
        self.use_tls = settings.SMTP_USE_TLS
        self.from_email = settings.EMAIL_FROM or settings.SMTP_USER

    @property
    def is_configured(self) -> bool:
        return settings.smtp_configured()

    async def send_bulk(self, recipients: List[str], subject: str, html_content: str) -> bool:
        if not recipients:
            return False
        if not self.is_configured:
            logger.warning("[email] SMTP not configured, skipping send to %s recipients", len(recipients))
            return False

        message = MIMEMultipart("alternative")
        message["From"] = self.from_email
        # 수신자 목록은 헤더에 노출하지 않고 envelope(BCC)로만 전달한다.
        message["To"] = self.from_email
        message["Subject"] = subject
        message.attach(MIMEText(html_content, "html"))

        try:
            await aiosmtplib.send(
                message,
                recipients=recipients,
                hostname=self.smtp_host,
                port=self.smtp_port,
                username=self.smtp_user,
                password=self.smtp_password,
                start_tls=self.use_tls,
            )
        except (aiosmtplib.SMTPException, OSError) as exc:
            logger.error("[email] failed to send '%s': %s", subject, exc)
            return False

        logger.info("[email] sent '%s' to %s recipients", subject, len(recipients))
        return True


def get_email_service() -> EmailService:
    return EmailService()


def render_notification_email(
    title: str,
    body: str,
    priority: str,
    notification_type: str,
    effective_label: str,
    expiration_label: Optional[str],
) -> str:
    safe_body = html.escape(body).replace("\n", "<br>")
    window = f"This notification is active from {effective_label}"
    if expiration_label:
        window += f" to {expiration_label}"
    return f"""
<!DOCTYPE html>
<html>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto;">
  <div style="padding: 20px; border: 1px solid #ddd; border-radius: 5px;">
    <div style="background-color: #f5f5f5; padding: 10px; border-bottom: 2px solid #ddd;">
      <h2 style="margin: 0;">{html.escape(title)}</h2>
      <p style="margin: 5px 0 0 0; font-size: 14px;">
        <span class="priority-{priority.lower()}">{html.escape(priority)} Priority</span> | {html.escape(notification_type)}
      </p>
    </div>
    <div style="padding: 20px 0;">{safe_body}</div>
    <div style="font-size: 12px; color: #777; border-top: 1px solid #ddd; padding-top: 10px;">
      <p>{window}</p>
      <p>Please do not reply to this email, it was sent automatically by the system.</p>
    </div>
  </div>
</body>
</html>
"""
