from __future__ import annotations

import json
from pathlib import Path

import structlog
from pydantic import ValidationError

from animesearch.domain.entities import Rule
from animesearch.domain.rules import RuleLoadError, RuleValidationError
from animesearch.infrastructure.rules.adapters import to_domain_rule
from animesearch.infrastructure.rules.validation_schema import RuleDefinitionPydantic

log = structlog.get_logger(__name__)


def load_rule_file(path: Path) -> Rule:
    """Load and validate a JSON rule file, returning the domain model."""
    try:
        raw = path.read_text(encoding="utf-8")
        data = json.loads(raw)
    except (OSError, UnicodeDecodeError) as e:
        log.error(
            "rule_load_failed",
            rule_file=str(path),
            error_type=type(e).__name__,
            error_message=str(e),
        )
        raise RuleLoadError(str(e)) from e
    except json.JSONDecodeError as e:
        log.error(
            "rule_validation_failed",
            rule_file=str(path),
            error_type=type(e).__name__,
            error_message=str(e),
        )
        raise RuleValidationError(str(e)) from e

    if not isinstance(data, dict):
        raise RuleValidationError("rule JSON root must be an object")

    try:
        pydantic_model = RuleDefinitionPydantic.model_validate(data)
    except ValidationError as e:
        log.error(
            "rule_validation_failed",
            rule_file=str(path),
            error_type="ValidationError",
            error_details=e.errors(),
        )
        raise RuleValidationError(str(e)) from e

    return to_domain_rule(pydantic_model)
