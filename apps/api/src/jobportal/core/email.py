"""
Email Service using Resend

Sends transactional email for the applicant signup flow.
"""

import asyncio
import logging
from html import escape

import resend

from jobportal.core.config import settings

logger = logging.getLogger(__name__)

resend.api_key = settings.resend_api_key


def mask_email(email: str) -> str:
    """
    Mask an email address for logs.

    Example: john.doe@example.com -> j***@example.com
    """
    if "@" not in email:
        return "***"

    local, domain = email.split("@", 1)
    masked_local = "*" if len(local) <= 1 else f"{local[0]}***"
    return f"{masked_local}@{domain}"


async def send_email(
    to_email: str,
    subject: str,
    html_content: str,
    text_content: str | None = None,
) -> bool:
    """
    Send an email using Resend.

    Args:
        to_email: Recipient email address
        subject: Email subject line
        html_content: HTML content of the email
        text_content: Optional plain-text alternative

    Returns:
        True if the email was accepted by the transport
    """
    if not resend.api_key:
        if settings.is_production:
            logger.error("Resend API key not set - cannot send email in production")
            return False
        logger.warning("Resend API key not set - logging email instead of sending")
        logger.info(f"EMAIL TO: {mask_email(to_email)} | SUBJECT: {subject}")
        return True

    try:
        params: resend.Emails.SendParams = {
            "from": settings.email_from,
            "to": [to_email],
            "subject": subject,
            "html": html_content,
        }
        if text_content:
            params["text"] = text_content

        # Resend's SDK is synchronous
        email = await asyncio.to_thread(resend.Emails.send, params)
        logger.info(f"Email sent to {mask_email(to_email)}, id: {email['id']}")
        return True
    except Exception as e:
        logger.error(f"Failed to send email to {mask_email(to_email)}: {e}")
        return False


async def send_verification_code(
    to_email: str,
    code: str,
    ttl_minutes: int,
) -> bool:
    """Send a one-time signup verification code."""
    safe_code = escape(code)

    html_content = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <style>
            body {{ font-family: system-ui, -apple-system, sans-serif; line-height: 1.6; color: #1f2937; }}
            .container {{ max-width: 600px; margin: 0 auto; padding: 40px 20px; }}
            .header {{ color: #0f4ec7; margin-bottom: 24px; }}
            .code {{ font-size: 28px; letter-spacing: 6px; font-weight: bold; color: #0f4ec7; margin: 24px 0; }}
            .footer {{ margin-top: 40px; padding-top: 20px; border-top: 1px solid #e5e7eb; color: #6b7280; font-size: 14px; }}
        </style>
    </head>
    <body>
        <div class="container">
            <h1 class="header">Your verification code</h1>

            <p>Use the code below to finish creating your applicant account:</p>

            <p class="code">{safe_code}</p>

            <p><strong>It expires in {ttl_minutes} minutes.</strong></p>

            <div class="footer">
                <p>If you didn't request this code, you can safely ignore this email.</p>
            </div>
        </div>
    </body>
    </html>
    """
    text_content = f"Your verification code is {code}. It expires in {ttl_minutes} minutes."

    return await send_email(
        to_email=to_email,
        subject="Your verification code",
        html_content=html_content,
        text_content=text_content,
    )
