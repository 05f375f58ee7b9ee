"""
Brevo e-mail client for borrow/return alerts.

Alerts are best effort: missing configuration or a failed send is logged and
never raised, so a notification problem cannot fail a transaction that the
backend already accepted.
"""

from datetime import datetime
from html import escape
from typing import Any, Dict, List, Optional, Tuple

import httpx

from shared.logging import get_logger


_ROW = '<tr{style}><td style="padding: 10px; font-weight: bold; width: 140px;">{label}:</td>' \
       '<td style="padding: 10px;{value_style}">{value}</td></tr>'

_PAGE = """<html>
  <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px; background-color: #f9f9f9; border-radius: 8px;">
      <h2 style="color: {accent}; margin-top: 0;">{title}</h2>
      <div style="background-color: white; padding: 20px; border-radius: 6px; margin: 20px 0;">
        <table style="width: 100%; border-collapse: collapse;">
          {rows}
        </table>
      </div>
      <p style="color: #666; font-size: 14px; margin-top: 20px;">
        This is an automated notification from the Makerspace Inventory Hub.
      </p>
    </div>
  </body>
</html>"""


def render_alert(title: str, accent: str, fields: List[Tuple[str, str]], highlight: str) -> str:
    """Render an alert page; the ``highlight`` field is shown in the accent colour."""
    rows = []
    for index, (label, value) in enumerate(fields):
        rows.append(_ROW.format(
            style=' style="background-color: #f8f9fa;"' if index % 2 else "",
            label=escape(label),
            value_style=f" color: {accent}; font-weight: bold;" if label == highlight else "",
            value=escape(value),
        ))
    return _PAGE.format(accent=accent, title=escape(title), rows="\n          ".join(rows))


class EmailNotifier:
    """Sends transaction alerts to the inventory admin through Brevo."""

    def __init__(
        self,
        api_key: str,
        admin_email: str,
        from_email: str,
        from_name: str = "Makerspace Inventory",
        *,
        api_url: str = "https://api.brevo.com/v3/smtp/email",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.admin_email = admin_email
        self.from_email = from_email
        self.from_name = from_name
        self.api_url = api_url
        self.timeout = timeout
        self._transport = transport
        self.logger = get_logger("inventory.email")

    async def send_borrow_alert(
        self,
        user_id: str,
        component: str,
        quantity: int,
        case_name: Optional[str] = None,
    ) -> bool:
        fields = [("User ID", user_id), ("Component", component)]
        if case_name:
            fields.append(("Case", case_name))
        fields += [("Quantity", f"{quantity} units"), ("Timestamp", _timestamp())]

        html_content = render_alert("Component Borrowed", "#2563eb", fields, highlight="Quantity")
        return await self.send(self.admin_email, f"📦 Inventory Alert: {component} Borrowed", html_content)

    async def send_return_alert(self, user_id: str, component: str, quantity: int) -> bool:
        fields = [
            ("User ID", user_id),
            ("Component", component),
            ("Quantity", f"{quantity} units"),
            ("Timestamp", _timestamp()),
        ]
        html_content = render_alert("Component Returned", "#16a34a", fields, highlight="Quantity")
        return await self.send(self.admin_email, f"✅ Inventory Alert: {component} Returned", html_content)

    async def send(self, to: str, subject: str, html_content: str) -> bool:
        """Send one e-mail. Returns True when Brevo accepted it."""
        if not self.api_key:
            self.logger.warning("Brevo API key not set; skipping email notification")
            return False

        if not to or not self.from_email:
            self.logger.warning("Email configuration incomplete; skipping notification")
            return False

        payload: Dict[str, Any] = {
            "sender": {"name": self.from_name, "email": self.from_email},
            "to": [{"email": to, "name": "Admin"}],
            "subject": subject,
            "htmlContent": html_content,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers={"accept": "application/json", "api-key": self.api_key},
                )
        except httpx.HTTPError as exc:
            self.logger.error("Error sending email", error=str(exc) or exc.__class__.__name__, subject=subject)
            return False

        if not response.is_success:
            self.logger.error(
                "Failed to send email via Brevo",
                status_code=response.status_code,
                response=response.text,
                subject=subject
            )
            return False

        self.logger.info("Email notification sent", subject=subject)
        return True


def _timestamp() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")
