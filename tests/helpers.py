"""Shared builders for GitHub search payloads and mocked HTTP clients."""

from __future__ import annotations

import typing as typ

import httpx

from github_random.config import Settings
from github_random.datasources.github_adapter import GitHubAdapter

BASE_URL = "https://example.test"


def make_settings(**overrides: typ.Any) -> Settings:
    """Settings pointed at a fake host; keyword names are the env aliases."""
    values: dict[str, typ.Any] = {"GITHUB_BASE_URL": BASE_URL, "GITHUB_TOKEN": None}
    values.update(overrides)
    return Settings(**values)


def search_item(
    repo_id: int,
    name: str,
    *,
    stars: int = 100,
    forks: int = 10,
    language: str | None = "Python",
    description: str | None = "A repository",
) -> dict[str, typ.Any]:
    """Build one item as returned by GitHub's repository search."""
    return {
        "id": repo_id,
        "name": name,
        "full_name": f"octo/{name}",
        "html_url": f"https://github.com/octo/{name}",
        "description": description,
        "stargazers_count": stars,
        "watchers_count": stars,
        "language": language,
        "forks_count": forks,
        "owner": {"login": "octo", "type": "User"},
    }


def mock_client(
    handler: typ.Callable[[httpx.Request], httpx.Response],
) -> tuple[httpx.AsyncClient, list[httpx.Request]]:
    """Return an AsyncClient whose requests are recorded and answered by ``handler``."""
    requests: list[httpx.Request] = []

    def _record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    return httpx.AsyncClient(transport=httpx.MockTransport(_record)), requests


def make_adapter(
    status: int = 200,
    payload: typ.Any = None,
    **settings: typ.Any,
) -> tuple[GitHubAdapter, list[httpx.Request]]:
    """Build a GitHubAdapter that always answers with ``status`` and ``payload``."""
    client, requests = mock_client(lambda _request: httpx.Response(status, json=payload))
    return GitHubAdapter(make_settings(**settings), http_client=client), requests
