from __future__ import annotations

from dataclasses import fields
from typing import Any, Final


class _Unset:
    __slots__ = ()

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset()


def changed_fields(patch: Any) -> dict[str, Any]:
    """Return the fields of a patch dataclass that were explicitly set."""
    return {
        field.name: getattr(patch, field.name)
        for field in fields(patch)
        if getattr(patch, field.name) is not UNSET
    }
