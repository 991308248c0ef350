from __future__ import annotations

from typing import Dict, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")

DOCUMENT_VIEW = "document"
CONTENT_VIEW = "content"


class ElementRegistry(Generic[T]):
    """Scroll targets keyed by ``(view, id)``.

    Each key is written once per build of the views; a second registration
    for the same key is ignored. ``clear`` starts a new build.
    """

    def __init__(self) -> None:
        self._elements: Dict[Tuple[str, str], T] = {}

    def register(self, view: str, element_id: str, element: T) -> bool:
        key = (view, element_id)
        if key in self._elements:
            return False
        self._elements[key] = element
        return True

    def get(self, view: str, element_id: str) -> Optional[T]:
        return self._elements.get((view, element_id))

    def clear(self, view: Optional[str] = None) -> None:
        if view is None:
            self._elements.clear()
            return
        for key in [k for k in self._elements if k[0] == view]:
            del self._elements[key]

    def __len__(self) -> int:
        return len(self._elements)
