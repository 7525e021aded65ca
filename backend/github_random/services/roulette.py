import random
from typing import Optional

from loguru import logger

from ..config import Settings, get_settings
from ..datasources.base import DataSource
from ..schemas import RepositoryRecord
from .selector import pick_one


class RandomRepoService:
    """Search the popular repositories of a language and hand back one of them."""

    def __init__(
        self,
        source: DataSource,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
    ):
        self.source = source
        self.settings = settings or get_settings()
        self.rng = rng

    async def random_repository(self, language: str, per_page: Optional[int] = None) -> RepositoryRecord:
        if per_page is None:
            per_page = self.settings.default_per_page
        logger.info(f"[random] searching language={language}, per_page={per_page}")
        repos = await self.source.search_repositories(language, per_page=per_page)
        if not repos:
            logger.warning(f"[random] no repositories returned for language={language}")
        picked = pick_one(repos, rng=self.rng)
        logger.info(f"[random] picked {picked.name} ({picked.stars} stars) out of {len(repos)}")
        return picked
