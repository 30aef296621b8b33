"""
Merge of a partial update (merge-patch) onto a stored entity.

Only fields that are present in the patch with a non-``None`` value are
copied; everything else keeps its stored value.  A field counts as
present when

* the patch is a mapping and contains the key,
* the patch is a pydantic model and the field was explicitly set, or
* the patch is an entity and the attribute is not ``None``.

Each field is merged on its own, there is no cross-field validation.
Associations are never touched by a merge.
"""

from typing import Any, Dict, Iterable, Mapping, Optional, TypeVar

from pydantic import BaseModel

from .entities import Entity

E = TypeVar("E", bound=Entity)


def present_fields(patch: Any) -> Dict[str, Any]:
    """Return the fields explicitly carried by ``patch`` with their values."""
    if isinstance(patch, Mapping):
        return dict(patch)
    if isinstance(patch, BaseModel):
        return {name: getattr(patch, name) for name in patch.model_fields_set}
    if isinstance(patch, Entity):
        return {
            name: getattr(patch, name)
            for name in type(patch).patchable_fields
            if getattr(patch, name, None) is not None
        }
    raise TypeError(f"Unsupported patch type: {type(patch).__name__}")


def merge_patch(target: E, patch: Any, fields: Optional[Iterable[str]] = None) -> E:
    """Apply ``patch`` onto ``target`` in place and return ``target``.

    ``fields`` restricts which attributes may be merged; it defaults to
    ``type(target).patchable_fields``.
    """
    allowed = tuple(fields) if fields is not None else type(target).patchable_fields
    values = present_fields(patch)
    for name in allowed:
        value = values.get(name)
        if value is not None:
            setattr(target, name, value)
    return target
