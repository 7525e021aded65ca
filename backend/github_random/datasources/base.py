from typing import List, Protocol

from ..schemas import RepositoryRecord


class DataSource(Protocol):
    async def search_repositories(self, language: str, per_page: int = 10) -> List[RepositoryRecord]:
        ...

    async def aclose(self) -> None:
        ...
