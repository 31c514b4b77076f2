from __future__ import annotations

from mockprep.core.classifier import category_groups
from mockprep.types import RoleCategory


def _normalize(value: str | RoleCategory) -> str:
    if isinstance(value, RoleCategory):
        value = value.value
    return value.strip().lower()


def roles_compatible(detected: str | RoleCategory, target: str | RoleCategory) -> bool:
    """Match on equality or containment first, then on a shared keyword group."""
    detected_value = _normalize(detected)
    target_value = _normalize(target)
    if not detected_value or not target_value:
        return False

    if detected_value == target_value or detected_value in target_value or target_value in detected_value:
        return True

    return bool(category_groups(detected_value) & category_groups(target_value))


def is_role_mismatch(detected: str | RoleCategory, target: str | RoleCategory) -> bool:
    return not roles_compatible(detected, target)
