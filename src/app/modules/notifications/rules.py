"""Evaluation of notification rule conditions and recipients."""

from typing import Any
from uuid import UUID

import structlog


logger = structlog.get_logger()

OPERATORS = ("equals", "not_equals", "contains", "greater_than", "less_than")
RECIPIENT_TYPES = ("user", "creator", "assignee", "all")

CREATOR_FIELDS = ("created_by", "created_by_id", "creator_id")
ASSIGNEE_FIELDS = ("assignee_id", "assigned_to")

_MISSING = object()


def get_nested_value(data: dict[str, Any], path: str) -> Any:
    """``get_nested_value({"staff": {"id": 1}}, "staff.id") == 1``."""
    value: Any = data
    for part in path.split("."):
        if not isinstance(value, dict) or part not in value:
            return _MISSING
        value = value[part]
    return value


def _to_number(value: Any) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def condition_holds(condition: dict[str, Any], entity_data: dict[str, Any]) -> bool:
    field = condition.get("field")
    operator = condition.get("operator")
    expected = condition.get("value")
    if not field or operator not in OPERATORS:
        return False

    actual = get_nested_value(entity_data, field)
    if actual is _MISSING:
        actual = None

    match operator:
        case "equals":
            return actual == expected
        case "not_equals":
            return actual != expected
        case "contains":
            if isinstance(actual, list):
                return expected in actual
            return actual is not None and str(expected) in str(actual)
        case "greater_than" | "less_than":
            left, right = _to_number(actual), _to_number(expected)
            if left is None or right is None:
                return False
            return left > right if operator == "greater_than" else left < right
    return False


def evaluate_conditions(
    conditions: list[dict[str, Any]] | None, entity_data: dict[str, Any]
) -> bool:
    """All conditions must hold. No conditions always matches."""
    return all(condition_holds(c, entity_data) for c in conditions or [])


def _as_uuid(value: Any) -> UUID | None:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None


def _first_id(entity_data: dict[str, Any], fields: tuple[str, ...]) -> UUID | None:
    for field in fields:
        if (user_id := _as_uuid(entity_data.get(field))) is not None:
            return user_id
    return None


def explicit_recipients(
    recipient_rules: list[dict[str, Any]] | None, entity_data: dict[str, Any]
) -> tuple[set[UUID], bool]:
    """Resolve recipient rules that do not need the database.

    Returns:
        Tuple of (user ids, whether an ``all`` rule was present)
    """
    ids: set[UUID] = set()
    include_all = False

    for rule in recipient_rules or []:
        match rule.get("type"):
            case "user":
                if (user_id := _as_uuid(rule.get("value"))) is not None:
                    ids.add(user_id)
            case "creator":
                if (user_id := _first_id(entity_data, CREATOR_FIELDS)) is not None:
                    ids.add(user_id)
            case "assignee":
                if (user_id := _first_id(entity_data, ASSIGNEE_FIELDS)) is not None:
                    ids.add(user_id)
            case "all":
                include_all = True
            case other:
                logger.warning("unknown_recipient_type", recipient_type=other)

    return ids, include_all
