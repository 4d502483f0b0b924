"""Client-credentials token manager for the Spotify Web API."""

from __future__ import annotations

import asyncio
import base64
import logging
from collections.abc import Callable
from datetime import datetime, timedelta

import httpx
from pydantic import ValidationError as PydanticValidationError

from discord_spotify_player.application.interfaces.catalog_client import CredentialProvider
from discord_spotify_player.config.settings import SpotifySettings
from discord_spotify_player.domain.catalog.entities import AccessCredential
from discord_spotify_player.domain.catalog.exceptions import (
    CatalogDisabledError,
    CredentialUnavailableError,
)
from discord_spotify_player.domain.shared.datetime_utils import utcnow
from discord_spotify_player.domain.shared.messages import ErrorMessages, LogTemplates
from discord_spotify_player.infrastructure.catalog.models import TokenPayload

logger = logging.getLogger(__name__)


class SpotifyCredentialManager(CredentialProvider):
    """Caches one access token and refreshes it when it expires.

    Concurrent callers that find the token expired share a single exchange.
    A failed or interrupted exchange is reported to the callers waiting on it
    as ``CredentialUnavailableError``; the next call starts a new one.
    """

    def __init__(
        self,
        settings: SpotifySettings,
        *,
        http_client: httpx.AsyncClient | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._settings = settings
        self._client = http_client or httpx.AsyncClient(timeout=settings.request_timeout_s)
        self._owns_client = http_client is None
        self._clock = clock
        self._credential: AccessCredential | None = None
        self._inflight: asyncio.Future[AccessCredential] | None = None

    @property
    def enabled(self) -> bool:
        return self._settings.is_configured

    def _basic_auth_header(self) -> str:
        pair = (
            f"{self._settings.client_id.get_secret_value()}:"
            f"{self._settings.client_secret.get_secret_value()}"
        )
        return "Basic " + base64.b64encode(pair.encode("utf-8")).decode("ascii")

    async def get_valid_credential(self) -> AccessCredential:
        if not self.enabled:
            raise CatalogDisabledError(ErrorMessages.CATALOG_NOT_CONFIGURED)

        credential = self._credential
        if credential is not None and credential.is_valid(self._clock()):
            return credential

        # Singleflight: everyone who sees an expired token waits on one exchange
        if self._inflight is not None:
            logger.debug(LogTemplates.CREDENTIAL_JOIN_INFLIGHT)
            return await asyncio.shield(self._inflight)

        future: asyncio.Future[AccessCredential] = asyncio.get_running_loop().create_future()
        self._inflight = future

        try:
            credential = await self._exchange()
        except CredentialUnavailableError as e:
            future.set_exception(e)
            # Retrieved here so a failure nobody else waited on is not reported as unhandled
            future.exception()
            raise
        except BaseException as e:
            # Joined callers get a failure, not the owner's cancellation
            logger.warning(LogTemplates.CREDENTIAL_EXCHANGE_INTERRUPTED, type(e).__name__)
            future.set_exception(
                CredentialUnavailableError(ErrorMessages.CATALOG_TOKEN_EXCHANGE_INTERRUPTED)
            )
            future.exception()
            raise
        else:
            self._credential = credential
            future.set_result(credential)
            return credential
        finally:
            self._inflight = None

    async def _exchange(self) -> AccessCredential:
        logger.debug(LogTemplates.CREDENTIAL_REFRESHING)
        requested_at = self._clock()

        try:
            response = await self._client.post(
                self._settings.auth_url,
                data={"grant_type": "client_credentials"},
                headers={"Authorization": self._basic_auth_header()},
            )
            response.raise_for_status()
            payload = TokenPayload.model_validate(response.json())
        except (httpx.HTTPError, ValueError, PydanticValidationError) as e:
            logger.error(LogTemplates.CREDENTIAL_EXCHANGE_FAILED, e)
            raise CredentialUnavailableError(
                ErrorMessages.CATALOG_TOKEN_EXCHANGE_FAILED.format(detail=e)
            ) from e

        logger.info(LogTemplates.CREDENTIAL_REFRESHED, payload.expires_in)
        return AccessCredential(
            token=payload.access_token,
            expires_at=requested_at + timedelta(seconds=payload.expires_in),
        )

    async def prime(self) -> None:
        """Fetch a token at startup so the first command doesn't pay for it."""
        if not self.enabled:
            logger.warning(LogTemplates.CREDENTIAL_DISABLED)
            return
        try:
            await self.get_valid_credential()
        except CredentialUnavailableError:
            logger.warning(LogTemplates.CREDENTIAL_PRIME_FAILED)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
