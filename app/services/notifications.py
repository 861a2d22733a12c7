"""Account notification emails sent over SMTP."""

import asyncio
import logging
import smtplib
from datetime import datetime
from email.message import EmailMessage
from typing import Optional

logger = logging.getLogger(__name__)

SHOP_NAME = "Afroditi's Delicacies"
SUPPORT_EMAIL = "contact@afroditisdelicacies.com"

PASSWORD_CHANGE_TEMPLATE = """\
Dear Customer,

This email confirms that your password for {shop} has been successfully changed.

Account Email: {email}
Changed On: {changed_on}

If you did not make this change, please contact us immediately at {support} \
or reset your password right away.

Best regards,
The {shop} Team
"""


class EmailNotifier:
    """Sends account emails through an SMTP relay.

    Without a host the message is only logged, which is what development
    and tests use.
    """

    def __init__(
        self,
        host: str = "",
        port: int = 25,
        user: str = "",
        password: str = "",
        from_addr: str = "noreply@example.com",
    ) -> None:
        self._host = host
        self._port = port
        self._user = user
        self._password = password
        self._from_addr = from_addr or user or "noreply@example.com"

    def _send(self, msg: EmailMessage) -> None:
        with smtplib.SMTP(self._host, self._port, timeout=10) as server:
            if self._user and self._password:
                server.starttls()
                server.login(self._user, self._password)
            server.send_message(msg)

    async def send_password_change_notification(
        self, email: str, changed_at: Optional[datetime] = None
    ) -> bool:
        """
        Tell a user their password was changed.

        Delivery failures are logged and reported through the return value;
        they never propagate to the caller.

        Returns:
            True if the message was handed to the relay or logged
        """
        changed_at = changed_at or datetime.now()
        msg = EmailMessage()
        msg["Subject"] = f"Your Password Has Been Changed - {SHOP_NAME}"
        msg["From"] = self._from_addr
        msg["To"] = email
        msg.set_content(
            PASSWORD_CHANGE_TEMPLATE.format(
                shop=SHOP_NAME,
                email=email,
                changed_on=changed_at.strftime("%A, %B %d, %Y %I:%M %p"),
                support=SUPPORT_EMAIL,
            )
        )

        if not self._host:
            logger.info("SMTP not configured; password change email for %s:\n%s", email, msg)
            return True

        try:
            await asyncio.to_thread(self._send, msg)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error("Password change email to %s failed: %s", email, exc)
            return False

        logger.info("Password change email sent to %s", email)
        return True
