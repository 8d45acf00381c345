"""Methods available on container variables, by core type.

Order matters: completion lists methods in the order declared here and
preselects the first one.
"""

from __future__ import annotations

from tfwrsense.models.index import CoreType, MethodInfo

METHOD_METADATA: dict[CoreType, tuple[MethodInfo, ...]] = {
    CoreType.LIST: (
        MethodInfo(
            name="append",
            label="list.append(item: Any) -> None",
            params=["item: Any"],
            doc="Append item to the end of the list.",
        ),
        MethodInfo(
            name="remove",
            label="list.remove(item: Any) -> None",
            params=["item: Any"],
            doc="Remove first occurrence of item. Raises if not present.",
        ),
        MethodInfo(
            name="insert",
            label="list.insert(index: int, item: Any) -> None",
            params=["index: int", "item: Any"],
            doc="Insert item at a given position.",
        ),
        MethodInfo(
            name="pop",
            label="list.pop(index: Optional[int] = None) -> Any",
            params=["index: Optional[int] = None"],
            doc="Remove and return item at index (default last).",
        ),
    ),
    CoreType.DICT: (
        MethodInfo(
            name="pop",
            label="dict.pop(key: Any) -> Any",
            params=["key: Any"],
            doc="Remove specified key and return the corresponding value.",
        ),
    ),
    CoreType.SET: (
        MethodInfo(
            name="add",
            label="set.add(item: Any) -> None",
            params=["item: Any"],
            doc="Add element to the set.",
        ),
        MethodInfo(
            name="remove",
            label="set.remove(item: Any) -> None",
            params=["item: Any"],
            doc="Remove element from the set. Raises if not present.",
        ),
    ),
}


def methods_for(core_type: CoreType) -> tuple[MethodInfo, ...]:
    """Methods of ``core_type``; empty for str and unknown."""
    return METHOD_METADATA.get(core_type, ())


def find_method(core_type: CoreType, name: str) -> MethodInfo | None:
    wanted = name.lower()
    for method in methods_for(core_type):
        if method.name.lower() == wanted:
            return method
    return None
