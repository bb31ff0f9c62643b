"""Backend – HttpxBackendClient speaking the StarFlight form protocol."""
from __future__ import annotations

import json
import logging
from typing import Any, Sequence
from uuid import UUID

import httpx

from starflight.backend.port import MessageOpenedReply, RegistrationReply, UnregistrationReply
from starflight.config.settings import DEFAULT_PUSH_URL
from starflight.kernel.errors import ProtocolError, TransportError

logger = logging.getLogger(__name__)

ACTION_REGISTER = "register"
ACTION_UNREGISTER = "unregister"
ACTION_MESSAGE_OPENED = "message_opened"


class HttpxBackendClient:
    """Async client for the single StarFlight push endpoint.

    Every call is one form-encoded POST. ``201`` means a registration was
    created, ``200`` means updated/ok; anything else is a
    :class:`TransportError` carrying the status code. No retries.
    """

    def __init__(
        self,
        push_url: str = DEFAULT_PUSH_URL,
        *,
        platform_type: str = "android",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._push_url = push_url
        self._platform_type = platform_type
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "HttpxBackendClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def register(
        self, app_id: str, client_secret: str, token: str, tags: Sequence[str] | None
    ) -> RegistrationReply:
        form = self._form(ACTION_REGISTER, app_id, client_secret, token)
        if tags:
            form["tags"] = ",".join(tags)
        response = await self._post(ACTION_REGISTER, form)

        if response.status_code == httpx.codes.CREATED:
            created = True
        elif response.status_code == httpx.codes.OK:
            created = False
        else:
            raise self._unexpected_status(ACTION_REGISTER, response)

        try:
            body = response.json()
            client_uuid = UUID(str(body["clientUuid"]))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
            raise ProtocolError(
                f"Failed to parse registration response: {exc}",
                detail={"body": response.text[:200]},
                cause=exc,
            ) from exc

        logger.info("backend.registered created=%s client_uuid=%s", created, client_uuid)
        return RegistrationReply(client_uuid=client_uuid, created=created)

    async def unregister(
        self, app_id: str, client_secret: str, token: str, tags: Sequence[str] | None
    ) -> UnregistrationReply:
        form = self._form(ACTION_UNREGISTER, app_id, client_secret, token)
        if tags:
            form["tags"] = ",".join(tags)
        response = await self._post(ACTION_UNREGISTER, form)
        if response.status_code != httpx.codes.OK:
            raise self._unexpected_status(ACTION_UNREGISTER, response)
        logger.info("backend.unregistered partial=%s", bool(tags))
        return UnregistrationReply(ok=True)

    async def mark_message_opened(
        self, app_id: str, client_secret: str, token: str, message_id: str
    ) -> MessageOpenedReply:
        form = self._form(ACTION_MESSAGE_OPENED, app_id, client_secret, token)
        form["uuid"] = message_id
        response = await self._post(ACTION_MESSAGE_OPENED, form)
        if response.status_code != httpx.codes.OK:
            raise self._unexpected_status(ACTION_MESSAGE_OPENED, response)
        logger.debug("backend.message_opened uuid=%s", message_id)
        return MessageOpenedReply(ok=True)

    def _form(self, action: str, app_id: str, client_secret: str, token: str) -> dict[str, str]:
        return {
            "action": action,
            "appId": app_id,
            "clientSecret": client_secret,
            "type": self._platform_type,
            "token": token,
        }

    async def _post(self, action: str, form: dict[str, str]) -> httpx.Response:
        try:
            return await self._client.post(self._push_url, data=form)
        except httpx.TimeoutException as exc:
            raise TransportError(f"StarFlight {action} request timed out", cause=exc) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"StarFlight {action} request failed: {exc}", cause=exc) from exc

    @staticmethod
    def _unexpected_status(action: str, response: httpx.Response) -> TransportError:
        logger.warning("backend.unexpected_status action=%s status=%d", action, response.status_code)
        return TransportError(
            f"Unexpected HTTP response code {response.status_code} for {action}",
            status_code=response.status_code,
            detail={"body": response.text[:200]},
        )


__all__ = ["HttpxBackendClient"]
