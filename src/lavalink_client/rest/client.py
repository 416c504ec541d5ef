"""
HTTP client for a Lavalink node's REST API.

The REST API resolves identifiers (URLs, ``ytsearch:`` queries, ...) into
playable tracks and decodes track blobs back into meta information.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Iterable, List, Optional

import aiohttp

from lavalink_client.core.types import (
    HEADER_AUTHORIZATION,
    REST_DECODE_TRACK,
    REST_DECODE_TRACKS,
    REST_LOAD_TRACKS,
)
from lavalink_client.infrastructure.exceptions import (
    MessageParseError,
    NetworkError,
    RestError,
)

from .models import LoadedTrack, LoadedTrackInfo, LoadResult

logger = logging.getLogger(__name__)


class RestClient:
    """HTTP client used to communicate with a Lavalink node."""

    def __init__(
        self,
        base_url: str,
        password: str,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: float = 10.0,
    ):
        """
        Initialize the REST client.

        Args:
            base_url: Node URL, e.g. ``http://127.0.0.1:2333``
            password: Node password, sent verbatim as the Authorization header
            session: Optional shared session; when given the caller owns it
            timeout: Total timeout per request in seconds
        """
        if not base_url.startswith(("http://", "https://")):
            raise ValueError("base_url must start with 'http://' or 'https://'")

        self.base_url = base_url.rstrip("/")
        self.password = password
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    def _get_default_headers(self) -> Dict[str, str]:
        # The node expects the bare password, without a Basic/Bearer scheme
        return {HEADER_AUTHORIZATION: self.password}

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def _request(
        self,
        method: str,
        route: str,
        params: Optional[Dict[str, str]] = None,
        body: Optional[Any] = None,
    ) -> Any:
        """Run a request and return the decoded JSON body."""
        url = f"{self.base_url}{route}"
        headers = self._get_default_headers()
        data = None
        if body is not None:
            headers["Content-Type"] = "application/json"
            data = json.dumps(body)

        session = self._get_session()
        try:
            # Injected sessions get the client timeout as well
            async with session.request(
                method,
                url,
                params=params,
                data=data,
                headers=headers,
                timeout=self.timeout,
            ) as response:
                text = await response.text()
                logger.debug(f"{method} {route} -> {response.status}")

                if response.status >= 400:
                    raise RestError(response.status, text or response.reason)

                try:
                    return json.loads(text)
                except ValueError as e:
                    raise MessageParseError(
                        f"Invalid JSON in response to {method} {route}: {e}"
                    ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(f"{method} {url} failed: {e}") from e

    async def load_tracks(self, identifier: str) -> LoadResult:
        """
        Load tracks matching an identifier.

        Args:
            identifier: A URL or a search query such as ``ytsearch:never gonna``

        Returns:
            LoadResult: Load type, tracks and playlist information
        """
        data = await self._request(
            "GET", REST_LOAD_TRACKS, params={"identifier": identifier}
        )

        # Nodes older than v3 answer with a bare list of tracks
        if isinstance(data, list):
            data = {
                "loadType": "SEARCH_RESULT" if data else "NO_MATCHES",
                "tracks": data,
            }

        try:
            result = LoadResult.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise MessageParseError(f"Unexpected loadtracks response: {e}") from e

        logger.info(
            f"Loaded {len(result.tracks)} tracks for '{identifier}' ({result.load_type.value})"
        )
        return result

    async def decode_track(self, track: str) -> LoadedTrack:
        """
        Decode a single track blob via the node.

        The node only returns the meta information, so the result pairs it
        with the given track string.
        """
        data = await self._request("GET", REST_DECODE_TRACK, params={"track": track})
        try:
            return LoadedTrack(track=track, info=LoadedTrackInfo.from_dict(data))
        except (AttributeError, TypeError, ValueError) as e:
            raise MessageParseError(f"Unexpected decodetrack response: {e}") from e

    async def decode_tracks(self, tracks: Iterable[str]) -> List[LoadedTrack]:
        """Decode several track blobs in one request."""
        data = await self._request("POST", REST_DECODE_TRACKS, body=list(tracks))
        try:
            return [LoadedTrack.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise MessageParseError(f"Unexpected decodetracks response: {e}") from e

    async def close(self) -> None:
        """Close the underlying session if this client created it."""
        if self._session and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "RestClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
