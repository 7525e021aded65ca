from typing import List, Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from ..config import Settings, get_settings
from ..errors import MalformedResponse, SearchFailed
from ..schemas import RepositoryRecord
from .base import DataSource

SEARCH_PATH = "/search/repositories"


def build_language_query(language: str) -> str:
    # passed through verbatim, GitHub decides what an odd identifier means
    return f"language:{language}"


class GitHubAdapter(DataSource):
    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or get_settings()
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "GitHub-Random",
        }
        if self.settings.github_token:
            headers["Authorization"] = f"Bearer {self.settings.github_token}"
        self.headers = headers
        self.base_url = str(self.settings.github_base_url).rstrip("/")
        if http_client is not None:
            self.client = http_client
            self._owns_client = False
            return
        client_kwargs = {
            "base_url": self.base_url,
            "timeout": self.settings.http_timeout_seconds,
        }
        if self.settings.github_proxy:
            client_kwargs["proxy"] = self.settings.github_proxy
        self.client = httpx.AsyncClient(**client_kwargs)
        self._owns_client = True

    async def search_repositories(self, language: str, per_page: int = 10) -> List[RepositoryRecord]:
        """Return the most starred repositories for ``language``, in GitHub's order.

        Raises SearchFailed on transport errors or non-2xx statuses and
        MalformedResponse when the body is not a search envelope.
        """
        params = {
            "q": build_language_query(language),
            "sort": "stars",
            "order": "desc",
            "per_page": per_page,
        }
        logger.info(f"[search] GET {SEARCH_PATH} q={params['q']} per_page={per_page}")
        try:
            resp = await self.client.get(
                f"{self.base_url}{SEARCH_PATH}", params=params, headers=self.headers
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.warning(f"[search] GitHub answered {status} for q={params['q']}")
            raise SearchFailed(status_code=status) from exc
        except httpx.RequestError as exc:
            logger.warning(f"[search] request error: {type(exc).__name__} {exc!r}")
            raise SearchFailed() from exc

        try:
            data = resp.json()
        except ValueError as exc:
            raise MalformedResponse("search response is not JSON") from exc
        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise MalformedResponse("search response has no items list")

        try:
            results = [RepositoryRecord.model_validate(item) for item in items]
        except ValidationError as exc:
            raise MalformedResponse(f"search item could not be normalized: {exc.error_count()} error(s)") from exc
        logger.debug(f"[search] {len(results)} repositories for q={params['q']}")
        return results

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "GitHubAdapter":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
