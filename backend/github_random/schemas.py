from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt, field_validator


class RepositoryRecord(BaseModel):
    """A search result normalized to the fields the UI displays.

    Validates straight from a GitHub search item (``html_url``,
    ``stargazers_count``) or from its own field names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: StrictInt
    name: str = Field(min_length=1)
    url: str = Field(validation_alias=AliasChoices("html_url", "url"))
    description: str = ""
    stars: StrictInt = Field(ge=0, validation_alias=AliasChoices("stargazers_count", "stars"))
    language: str = ""
    forks_count: StrictInt = Field(ge=0)

    @field_validator("description", "language", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Optional[str]) -> str:
        # GitHub sends null for repos without a description or detected language
        return "" if value is None else value


class LanguageEntry(BaseModel):
    """One item of the languages resource; the original file spells the keys title/value."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(validation_alias=AliasChoices("label", "title"))
    identifier: str = Field(validation_alias=AliasChoices("identifier", "value"))


class LanguageOption(BaseModel):
    identifier: str
    label: str


class LanguagesResponse(BaseModel):
    loaded: bool
    default: str
    languages: List[LanguageOption]


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
