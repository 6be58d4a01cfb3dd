"""Twilio SMS notifier for SOS alerts."""

from __future__ import annotations

import asyncio
import logging

import httpx

from guardian_sos.core.config import settings

logger = logging.getLogger(__name__)


class SmsService:
    """Sends SOS messages through the Twilio Messages REST API.

    Every failure (missing credentials, transport errors, non-2xx replies) is
    logged and reported as ``False``; nothing is raised to the caller and
    nothing is retried.
    """

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        api_base: str = "https://api.twilio.com",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        if not self.enabled:
            logger.warning("Twilio credentials missing - SMS sending disabled.")

    @property
    def enabled(self) -> bool:
        return bool(self.account_sid and self.auth_token and self.from_number)

    @property
    def messages_url(self) -> str:
        return f"{self.api_base}/2010-04-01/Accounts/{self.account_sid}/Messages.json"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            auth=(self.account_sid, self.auth_token),
            timeout=self.timeout,
            transport=self._transport,
        )

    async def send_message(self, to: str, body: str) -> bool:
        """Send one SMS. Returns True when Twilio accepted it."""
        if not self.enabled:
            logger.error("Twilio not configured. Skipping SMS to %s.", to)
            return False
        async with self._client() as client:
            return await self._send(client, to, body)

    async def broadcast(self, recipients: list[str], body: str) -> dict[str, bool]:
        """Send the same message to every recipient concurrently.

        Each send is isolated: one failure never stops the others.
        """
        if not recipients:
            logger.warning("broadcast called with no recipients.")
            return {}
        if not self.enabled:
            logger.error("Twilio not configured. Skipping SMS broadcast to %s recipient(s).", len(recipients))
            return {to: False for to in recipients}

        async with self._client() as client:
            outcomes = await asyncio.gather(
                *(self._send(client, to, body) for to in recipients),
                return_exceptions=True,
            )

        results: dict[str, bool] = {}
        for to, outcome in zip(recipients, outcomes):
            if isinstance(outcome, BaseException):
                logger.error("Failed to send SMS to %s: %r", to, outcome)
                outcome = False
            results[to] = outcome
        logger.info("SMS broadcast finished: %s/%s sent", sum(results.values()), len(results))
        return results

    async def _send(self, client: httpx.AsyncClient, to: str, body: str) -> bool:
        try:
            response = await client.post(
                self.messages_url,
                data={"To": to, "From": self.from_number, "Body": body},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error("Failed to send SMS to %s: HTTP %s %s", to, exc.response.status_code, exc.response.text)
            return False
        except httpx.HTTPError as exc:
            logger.error("Failed to send SMS to %s: %s", to, exc)
            return False

        try:
            sid = response.json().get("sid")
        except ValueError:
            sid = None
        logger.info("SMS sent to %s: %s", to, sid)
        return True


_service: SmsService | None = None


def get_sms_service() -> SmsService:
    """Return the app-wide SmsService built from settings."""
    global _service
    if _service is None:
        _service = SmsService(
            account_sid=settings.twilio_account_sid,
            auth_token=settings.twilio_auth_token,
            from_number=settings.twilio_from_number,
            api_base=settings.twilio_api_base,
            timeout=settings.sms_timeout_seconds,
        )
    return _service
