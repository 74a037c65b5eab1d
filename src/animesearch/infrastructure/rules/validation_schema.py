"""Pydantic validation model for Kazumi-format rule JSON files."""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RuleDefinitionPydantic(BaseModel):
    """One rule file.

    Keys use the camelCase names of the Kazumi rule format; unknown keys
    (``muliSources``, ``useWebview``, ...) are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(..., min_length=1)
    version: str = ""
    api: str = ""
    type: str = ""

    base_url: str = Field(..., alias="baseURL")
    search_url: str = Field(..., alias="searchURL")
    use_post: bool = Field(default=False, alias="usePost")

    search_list: str = Field(default="", alias="searchList")
    search_name: str = Field(default="", alias="searchName")
    search_result: str = Field(default="", alias="searchResult")
    chapter_roads: str = Field(default="", alias="chapterRoads")
    chapter_result: str = Field(default="", alias="chapterResult")

    user_agent: str = Field(default="", alias="userAgent")
    referer: str = ""

    color: str = "gray"
    tags: List[str] = Field(default_factory=list)
    magic: bool = False

    @field_validator("name")
    @classmethod
    def _validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("version", "api", mode="before")
    @classmethod
    def _coerce_str(cls, v: Any) -> Any:
        # Some rule files store these as numbers.
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        if v is None:
            return ""
        return v
