"""
services/credentials_email.py

자격 증명 안내 메일 본문 생성 및 발송.

주요 기능:
- 사용자 유형(player / staff)에 맞는 제목 / 텍스트 / HTML 본문 생성
- SMTP_HOST 가 설정되어 있으면 SMTP 로 발송
- 설정이 없으면 발송하지 않고 수신자 / 제목만 로그로 남김 (개발 환경)

설계 원칙:
- 비밀번호는 메일 본문에만 들어가고 로그에는 남기지 않음
- 메일 발송 실패는 예외로 전달하여 함수 엔드포인트가 500 으로 응답

"""

import html
import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage

from app.core.config import settings

logger = logging.getLogger(__name__)

PLATFORM_NAME = "Sports Management Platform"


@dataclass(frozen=True)
class RenderedEmail:
    to: str
    subject: str
    text: str
    html: str


def build_subject(user_type: str, club_name: str | None) -> str:
    if user_type == "player":
        return "Your Player Account Credentials"
    return f"Your {club_name or 'Club'} Staff Account Credentials"


def render_credentials_email(
    *,
    to: str,
    recipient_name: str,
    username: str,
    password: str,
    user_type: str,
    club_name: str | None = None,
) -> RenderedEmail:
    if user_type == "player":
        intro = "Your player account has been created."
        contact = "club administrator"
    else:
        intro = f"You have been added as a staff member for {club_name or 'the club'}."
        contact = "super administrator"

    text = "\n".join([
        f"Welcome to {PLATFORM_NAME}",
        "",
        f"Hello {recipient_name},",
        "",
        intro,
        "",
        "Your Login Credentials:",
        f"- Email/Username: {username}",
        f"- Temporary Password: {password}",
        "",
        "IMPORTANT: Please change this password immediately after your first login.",
        "",
        "Next Steps:",
        "1. Visit the login page",
        "2. Enter your username/email and the temporary password",
        "3. Create a new secure password",
        "4. Complete your profile setup",
        "",
        f"If you have any questions, please contact your {contact}.",
        "",
        "This is an automated message.",
    ])

    esc = html.escape
    staff_note = (
        "<p><strong>Your Access Level:</strong> You have been granted specific permissions "
        "to manage club operations. Please review your assigned features after logging in.</p>"
        if user_type == "staff" else ""
    )
    body = f"""<!DOCTYPE html>
<html>
  <head><meta charset="utf-8"></head>
  <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
    <h1>Welcome to {PLATFORM_NAME}</h1>
    <p>Hello {esc(recipient_name)},</p>
    <p>{esc(intro)}</p>
    <h3>Your Login Credentials</h3>
    <p><strong>Email / Username:</strong> <code>{esc(username)}</code></p>
    <p><strong>Temporary Password:</strong> <code>{esc(password)}</code></p>
    <p><strong>Important Security Notice:</strong> please change this password immediately
    after your first login. Do not share it with anyone.</p>
    {staff_note}
    <p>If you have any questions, please contact your {contact}.</p>
    <p style="color: #6b7280; font-size: 14px;">This is an automated message. Please do not reply to this email.</p>
  </body>
</html>
"""

    return RenderedEmail(
        to=to,
        subject=build_subject(user_type, club_name),
        text=text,
        html=body,
    )


def deliver(email: RenderedEmail) -> None:
    if not settings.SMTP_HOST:
        logger.info("SMTP not configured, email to %s not sent (subject=%r)", email.to, email.subject)
        return

    msg = EmailMessage()
    msg["From"] = settings.MAIL_FROM
    msg["To"] = email.to
    msg["Subject"] = email.subject
    msg.set_content(email.text)
    msg.add_alternative(email.html, subtype="html")

    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=10) as smtp:
        smtp.starttls()
        if settings.SMTP_USERNAME:
            smtp.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD or "")
        smtp.send_message(msg)

    logger.info("Credentials email sent to %s", email.to)
