"""Normalization of free-form Gemini output.

Categorization always resolves to one member of ``EmailCategory``; action
item extraction always resolves to a (possibly empty) list.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from email_productivity_agent.models import EmailCategory, ExtractedActionItem

# Checked in order; the first keyword set with a substring hit wins.
CATEGORY_KEYWORDS: tuple[tuple[EmailCategory, tuple[str, ...]], ...] = (
    (EmailCategory.SPAM, ("spam", "junk", "phishing", "scam")),
    (EmailCategory.NEWSLETTER, ("newsletter", "marketing", "promo", "promotion", "digest")),
    (
        EmailCategory.TODO,
        ("to-do", "todo", "to do", "task", "action item", "follow-up", "follow up"),
    ),
    (EmailCategory.IMPORTANT, ("important", "urgent", "high priority")),
)

# Unrecognized answers still surface in the inbox rather than disappear.
FALLBACK_CATEGORY = EmailCategory.IMPORTANT

_CODE_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```$", re.S)


def normalize_category(raw: str) -> EmailCategory:
    """Map a raw model answer to a canonical category."""
    cleaned = (raw or "").strip().lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in cleaned for keyword in keywords):
            return category
    return FALLBACK_CATEGORY


@dataclass(frozen=True)
class SingleItem:
    item: ExtractedActionItem


@dataclass(frozen=True)
class ManyItems:
    items: list[ExtractedActionItem]


@dataclass(frozen=True)
class InvalidItems:
    reason: str


ActionItemParse = SingleItem | ManyItems | InvalidItems


def _strip_code_fence(raw: str) -> str:
    text = raw.strip()
    match = _CODE_FENCE_RE.match(text)
    return match.group(1).strip() if match else text


def _to_item(value: Any) -> ExtractedActionItem | None:
    if not isinstance(value, dict):
        return None
    deadline = value.get("deadline")
    try:
        return ExtractedActionItem(
            task=str(value.get("task") or "").strip(),
            deadline="" if deadline is None else str(deadline),
        )
    except ValidationError:
        return None


def parse_action_items(raw: str) -> ActionItemParse:
    """Parse a model answer as one task object or a list of task objects."""
    try:
        parsed = json.loads(_strip_code_fence(raw or ""))
    except (ValueError, RecursionError) as exc:
        return InvalidItems(f"not JSON: {exc}")

    if isinstance(parsed, dict):
        item = _to_item(parsed)
        if item is None:
            return InvalidItems("object without a task")
        return SingleItem(item)
    if isinstance(parsed, list):
        return ManyItems([item for item in map(_to_item, parsed) if item is not None])
    return InvalidItems(f"unexpected JSON type {type(parsed).__name__}")


def action_items_from_response(raw: str) -> list[ExtractedActionItem]:
    """Resolve a model answer to a list of tasks, never raising."""
    result = parse_action_items(raw)
    if isinstance(result, SingleItem):
        return [result.item]
    if isinstance(result, ManyItems):
        return result.items
    return []
