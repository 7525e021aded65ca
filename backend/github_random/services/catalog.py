import json
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import httpx
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from ..config import Settings, get_settings
from ..errors import CatalogLoadFailed
from ..schemas import LanguageEntry

_ENTRIES = TypeAdapter(List[LanguageEntry])


class LanguageCatalog:
    """Selectable languages, identifier -> label, in the order of the source list.

    Empty and ``loaded == False`` until a load succeeds. Only the loader
    writes to it.
    """

    def __init__(self):
        self._labels: Dict[str, str] = {}
        self.loaded = False

    def publish(self, entries: Iterable[LanguageEntry]) -> None:
        labels: Dict[str, str] = {}
        for entry in entries:
            labels[entry.identifier] = entry.label
        self._labels = labels
        self.loaded = True

    def label(self, identifier: str) -> Optional[str]:
        return self._labels.get(identifier)

    def items(self) -> List[Tuple[str, str]]:
        return list(self._labels.items())

    def as_dict(self) -> Dict[str, str]:
        return dict(self._labels)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._labels

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._labels))

    def __len__(self) -> int:
        return len(self._labels)


class CatalogLoader:
    """Reads the languages resource and publishes it into a LanguageCatalog.

    ``source`` is either an http(s) URL or a path on disk. Failures never
    escape ``load``: they are logged and the catalog keeps what it had.
    """

    def __init__(
        self,
        catalog: LanguageCatalog,
        source: Optional[str] = None,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or get_settings()
        self.catalog = catalog
        self.source = source or self.settings.languages_source
        self.http_client = http_client

    async def load(self) -> LanguageCatalog:
        logger.info(f"[catalog] loading languages from {self.source}")
        try:
            raw = await self._read()
            entries = self._parse(raw)
        except CatalogLoadFailed as exc:
            logger.error(f"[catalog] failed to load languages: {exc}")
            return self.catalog
        self.catalog.publish(entries)
        logger.info(f"[catalog] {len(self.catalog)} languages available")
        return self.catalog

    async def _read(self) -> str:
        if self.source.startswith(("http://", "https://")):
            return await self._fetch(self.source)
        try:
            return Path(self.source).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise CatalogLoadFailed(f"cannot read {self.source}: {exc}") from exc

    async def _fetch(self, url: str) -> str:
        client = self.http_client or httpx.AsyncClient(timeout=self.settings.http_timeout_seconds)
        try:
            resp = await client.get(url)
            resp.raise_for_status()
            return resp.text
        except httpx.HTTPStatusError as exc:
            raise CatalogLoadFailed(f"GET {url} returned {exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            raise CatalogLoadFailed(f"GET {url} failed: {type(exc).__name__}") from exc
        finally:
            if self.http_client is None:
                await client.aclose()

    @staticmethod
    def _parse(raw: str) -> List[LanguageEntry]:
        try:
            return _ENTRIES.validate_python(json.loads(raw))
        except json.JSONDecodeError as exc:
            raise CatalogLoadFailed(f"languages resource is not JSON: {exc}") from exc
        except ValidationError as exc:
            raise CatalogLoadFailed(f"languages resource has invalid entries: {exc.error_count()} error(s)") from exc
