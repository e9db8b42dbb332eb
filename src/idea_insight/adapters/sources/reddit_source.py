"""Reddit source for fetching top community posts."""

import asyncio
import logging
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from idea_insight.core import DiscussionSource, EvidenceFetchError, EvidenceItem, Provenance

logger = logging.getLogger(__name__)

TOKEN_URL = "https://www.reddit.com/api/v1/access_token"
OAUTH_BASE = "https://oauth.reddit.com"
PUBLIC_BASE = "https://www.reddit.com"


class RedditSource(DiscussionSource):
    """Fetch top posts of a subreddit.

    Uses an app-only OAuth token when client credentials are configured,
    otherwise the public JSON endpoint.
    """

    name = "reddit"

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        user_agent: str = "idea-insight/0.1",
        timeframe: str = "week",
        timeout: float = 8.0,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.user_agent = user_agent
        self.timeframe = timeframe
        self.timeout = timeout
        self._access_token: Optional[str] = None
        self._token_lock = asyncio.Lock()

    @property
    def uses_oauth(self) -> bool:
        return bool(self.client_id and self.client_secret)

    async def fetch_items(self, community: str, limit: int) -> list[EvidenceItem]:
        """Fetch top posts of the week from r/{community}."""
        params = {"limit": limit, "t": self.timeframe, "raw_json": 1}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                headers = {"User-Agent": self.user_agent}
                if self.uses_oauth:
                    token = await self._get_token(client)
                    headers["Authorization"] = f"Bearer {token}"
                    url = f"{OAUTH_BASE}/r/{community}/top"
                else:
                    url = f"{PUBLIC_BASE}/r/{community}/top.json"

                response = await client.get(url, headers=headers, params=params)
        except httpx.HTTPError as e:
            raise EvidenceFetchError(community, f"request failed: {e}") from e

        if response.status_code in (401, 403):
            self._access_token = None
            raise EvidenceFetchError(community, f"authorization failed ({response.status_code})")
        if response.status_code == 429:
            raise EvidenceFetchError(community, "rate limited (429)")
        if response.status_code != 200:
            raise EvidenceFetchError(community, f"unexpected status {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise EvidenceFetchError(community, f"invalid JSON: {e}") from e

        items = []
        for child in data.get("data", {}).get("children", []):
            item = self._parse_post(child.get("data", {}), community)
            if item:
                items.append(item)

        logger.info("Fetched %d posts from r/%s", len(items), community)
        return items[:limit]

    async def _get_token(self, client: httpx.AsyncClient) -> str:
        """Get an app-only access token, cached for the source lifetime."""
        if self._access_token:
            return self._access_token

        async with self._token_lock:
            # Another task may have fetched it while we waited
            if self._access_token:
                return self._access_token
            return await self._request_token(client)

    async def _request_token(self, client: httpx.AsyncClient) -> str:
        response = await client.post(
            TOKEN_URL,
            auth=(self.client_id, self.client_secret),
            data={"grant_type": "client_credentials"},
            headers={"User-Agent": self.user_agent},
        )
        if response.status_code != 200:
            raise httpx.HTTPStatusError(
                f"Token request failed with status {response.status_code}",
                request=response.request,
                response=response,
            )

        try:
            token = response.json().get("access_token")
        except ValueError as e:
            raise httpx.HTTPStatusError(
                f"Token response is not JSON: {e}",
                request=response.request,
                response=response,
            ) from e
        if not token:
            raise httpx.HTTPStatusError(
                "Token response has no access_token",
                request=response.request,
                response=response,
            )
        self._access_token = token
        return token

    def _parse_post(self, post: dict, community: str) -> Optional[EvidenceItem]:
        """Convert a listing child to an evidence item."""
        title = (post.get("title") or "").strip()
        if not title or post.get("stickied"):
            return None

        body = self._clean_body(post.get("selftext_html")) or (post.get("selftext") or "").strip()
        permalink = post.get("permalink")
        created = post.get("created_utc")

        return EvidenceItem(
            source_community=community,
            title=title,
            body_text=body or None,
            engagement_score=max(int(post.get("score") or 0), 0),
            comment_count=max(int(post.get("num_comments") or 0), 0),
            provenance=Provenance.REAL,
            url=f"https://www.reddit.com{permalink}" if permalink else None,
            created_utc=int(created) if created else None,
        )

    def _clean_body(self, html: Optional[str]) -> str:
        """Strip HTML markup from a post body."""
        if not html:
            return ""
        soup = BeautifulSoup(html, "html.parser")
        return soup.get_text(separator=" ", strip=True)
