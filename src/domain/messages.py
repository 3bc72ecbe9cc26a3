"""
Verification message rendering.

Builds the verification link and the plain-text and HTML bodies of the
verification email.
"""

from html import escape
from urllib.parse import quote

# Characters encodeURIComponent leaves unescaped beyond quote()'s defaults
_URI_COMPONENT_SAFE = "!~*'()"

_TEXT_TEMPLATE = """Hello {first_name},

Thank you for creating an account. Please verify your email address by clicking the link below:

{link}

This link will expire in {expiry}.

If you did not create an account, please ignore this email.

Best regards,
{signature}"""

_HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <style>
    body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
    .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
    .button {{
      display: inline-block;
      padding: 12px 24px;
      background-color: #007bff;
      color: white;
      text-decoration: none;
      border-radius: 4px;
      margin: 20px 0;
    }}
    .footer {{ margin-top: 30px; font-size: 12px; color: #666; }}
  </style>
</head>
<body>
  <div class="container">
    <h2>{subject}</h2>
    <p>Hello {first_name},</p>
    <p>Thank you for creating an account. Please verify your email address by clicking the button below:</p>
    <a href="{link}" class="button">Verify Email</a>
    <p>Or copy and paste this link into your browser:</p>
    <p style="word-break: break-all; color: #007bff;">{link}</p>
    <p><strong>This link will expire in {expiry}.</strong></p>
    <p>If you did not create an account, please ignore this email.</p>
    <div class="footer">
      <p>Best regards,<br>{signature}</p>
    </div>
  </div>
</body>
</html>"""


def build_verification_link(domain: str, email: str, token: str) -> str:
    """
    Build the link the recipient follows to verify their address.

    The email is percent-encoded like JavaScript's encodeURIComponent,
    so ``a@b.com`` becomes ``a%40b.com``. The token is inserted verbatim.
    """
    encoded_email = quote(email, safe=_URI_COMPONENT_SAFE)
    return f"https://{domain}/v1/user/verify?email={encoded_email}&token={token}"


def describe_duration(seconds: int) -> str:
    """Render a duration as human-readable copy, e.g. ``1 minute`` or ``2 hours``."""
    for unit_seconds, unit in ((86400, "day"), (3600, "hour"), (60, "minute")):
        if seconds >= unit_seconds and seconds % unit_seconds == 0:
            count = seconds // unit_seconds
            return f"{count} {unit}" if count == 1 else f"{count} {unit}s"
    return f"{seconds} second" if seconds == 1 else f"{seconds} seconds"


def render_text_body(first_name: str, link: str, expiry: str, signature: str) -> str:
    return _TEXT_TEMPLATE.format(
        first_name=first_name, link=link, expiry=expiry, signature=signature
    )


def render_html_body(
    first_name: str, link: str, expiry: str, signature: str, subject: str
) -> str:
    return _HTML_TEMPLATE.format(
        first_name=escape(first_name),
        link=escape(link),
        expiry=escape(expiry),
        signature=escape(signature),
        subject=escape(subject),
    )
