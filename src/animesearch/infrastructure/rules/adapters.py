"""Adapters to convert Pydantic validation models to domain models."""

from __future__ import annotations

from animesearch.domain.entities.rule import Rule
from animesearch.infrastructure.rules import validation_schema as infra


def to_domain_rule(pydantic: infra.RuleDefinitionPydantic) -> Rule:
    """Convert a validated rule file to the immutable domain Rule."""
    return Rule(
        name=pydantic.name,
        base_url=pydantic.base_url,
        search_url=pydantic.search_url,
        use_post=pydantic.use_post,
        search_list=pydantic.search_list,
        search_name=pydantic.search_name,
        search_result=pydantic.search_result,
        chapter_roads=pydantic.chapter_roads,
        chapter_result=pydantic.chapter_result,
        color=pydantic.color,
        tags=tuple(pydantic.tags),
        version=pydantic.version,
        magic=pydantic.magic,
        api=pydantic.api,
        type=pydantic.type,
        user_agent=pydantic.user_agent,
        referer=pydantic.referer,
    )
