# src/config/rules_loader.py

import logging
import os
from dataclasses import dataclass
from typing import Tuple

import yaml

from src.domain.exceptions import RulesConfigError
from src.infrastructure.keyword_scorer import DEFAULT_TOPIC_GROUPS, TopicGroup
from src.infrastructure.template_synthesizer import (
    DEFAULT_INTENT_CATEGORIES,
    DEFAULT_TEMPLATE,
    IntentCategory,
)


logger = logging.getLogger(__name__)

_TEMPLATE_FIELDS = {"filename": "report.pdf", "excerpt": "Some excerpt."}


@dataclass(frozen=True)
class RuleTables:
    topic_groups: Tuple[TopicGroup, ...] = DEFAULT_TOPIC_GROUPS
    intent_categories: Tuple[IntentCategory, ...] = DEFAULT_INTENT_CATEGORIES
    default_template: str = DEFAULT_TEMPLATE


def _check_template(template, where: str) -> str:
    if not isinstance(template, str) or not template.strip():
        raise RulesConfigError(f"{where}: template must be a non-empty string")
    try:
        template.format(**_TEMPLATE_FIELDS)
    except (AttributeError, KeyError, IndexError, ValueError) as error:
        raise RulesConfigError(
            f"{where}: template may only use {{filename}} and {{excerpt}} ({error})"
        ) from error
    return template


def _check_keywords(keywords, where: str) -> Tuple[str, ...]:
    if not isinstance(keywords, list) or not keywords:
        raise RulesConfigError(f"{where}: 'keywords' must be a non-empty list")
    if not all(isinstance(k, str) and k.strip() for k in keywords):
        raise RulesConfigError(f"{where}: keywords must be non-empty strings")
    return tuple(k.strip() for k in keywords)


def _parse_topic_groups(raw) -> Tuple[TopicGroup, ...]:
    if not isinstance(raw, dict) or not raw:
        raise RulesConfigError("'topic_groups' must be a non-empty mapping of name -> keywords")
    return tuple(
        TopicGroup(str(name), _check_keywords(keywords, f"topic group '{name}'"))
        for name, keywords in raw.items()
    )


def _parse_intents(raw) -> Tuple[IntentCategory, ...]:
    if not isinstance(raw, list) or not raw:
        raise RulesConfigError("'intents' must be a non-empty list")

    categories = []
    for idx, entry in enumerate(raw, start=1):
        if not isinstance(entry, dict) or "name" not in entry:
            raise RulesConfigError(f"Intent #{idx} missing 'name' field")
        where = f"intent '{entry['name']}'"
        categories.append(IntentCategory(
            name=str(entry["name"]),
            keywords=_check_keywords(entry.get("keywords"), where),
            template=_check_template(entry.get("template"), where),
        ))
    return tuple(categories)


def load_rule_tables(path: str) -> RuleTables:
    """
    Load topic groups and intent templates from a YAML file.
    Sections left out of the file keep their built-in defaults.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Rules file not found at {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as error:
            raise RulesConfigError(f"Rules file {path} is not valid YAML: {error}") from error

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise RulesConfigError(f"Rules file {path} must contain a mapping at top level")

    unknown = set(raw) - {"topic_groups", "intents", "default_template"}
    if unknown:
        raise RulesConfigError(f"Unknown keys in rules file: {', '.join(sorted(unknown))}")

    tables = RuleTables(
        topic_groups=(
            _parse_topic_groups(raw["topic_groups"])
            if "topic_groups" in raw else DEFAULT_TOPIC_GROUPS
        ),
        intent_categories=(
            _parse_intents(raw["intents"])
            if "intents" in raw else DEFAULT_INTENT_CATEGORIES
        ),
        default_template=(
            _check_template(raw["default_template"], "default_template")
            if "default_template" in raw else DEFAULT_TEMPLATE
        ),
    )

    logger.info(
        "Loaded rules from %s: %d topic groups, %d intents",
        path, len(tables.topic_groups), len(tables.intent_categories),
    )
    return tables
