"""Lichess API client for the chess rating widget."""

import logging

import httpx
from pydantic import ValidationError

from devsite.core.models import ChessData, LichessProfile

logger = logging.getLogger(__name__)

RAPID = "rapid"


class ChessAPIError(Exception):
    """Raised when ratings cannot be fetched from Lichess."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def profile_to_chess_data(profile: LichessProfile) -> ChessData:
    """Pick the rapid rating out of a Lichess profile.

    A profile with no rapid games yields a rating of 0.
    """
    perf = profile.perfs.get(RAPID)
    if perf is None:
        return ChessData(username=profile.username or None)
    return ChessData(
        rapid=perf.rating,
        games=perf.games,
        username=profile.username or None,
    )


class LichessClient:
    """Fetches the account profile of the token's owner."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    async def fetch_profile(self) -> LichessProfile:
        """Fetch and decode the account profile.

        Raises:
            ChessAPIError: On a missing key, transport failure, error
                status or undecodable body.
        """
        if not self.api_key:
            raise ChessAPIError("Lichess API key is not configured")

        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            async with httpx.AsyncClient(
                transport=self._transport, timeout=self.timeout
            ) as client:
                res = await client.get(self.api_url, headers=headers)
                res.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("Lichess returned status %d", e.response.status_code)
            raise ChessAPIError("Error fetching data from lichess") from e
        except httpx.HTTPError as e:
            logger.error("Request to lichess failed: %s", e)
            raise ChessAPIError("Error fetching data from lichess") from e

        try:
            return LichessProfile.model_validate_json(res.content)
        except ValidationError as e:
            logger.error("Could not decode lichess response: %s", e)
            raise ChessAPIError("Error marshalling data from lichess") from e

    async def fetch_ratings(self) -> ChessData:
        """Fetch the profile and return the rating widget data."""
        profile = await self.fetch_profile()
        return profile_to_chess_data(profile)
