# shopcart/session.py
from __future__ import annotations

from typing import Any, MutableMapping, Optional, Protocol


class SessionStore(Protocol):
    """What the cart needs from a session: four calls on string keys."""

    def has(self, key: str) -> bool: ...

    def get(self, key: str) -> Optional[Any]: ...

    def put(self, key: str, content: Any) -> None: ...

    def remove(self, key: str) -> None: ...


class DjangoSessionStore:
    """
    Adapts ``request.session`` (any django.contrib.sessions backend).

    Values must survive the session serializer, which is JSON by default,
    so callers hand in plain dicts/lists/scalars.
    """

    def __init__(self, session: MutableMapping[str, Any]):
        self.session = session

    def _touch(self) -> None:
        # plain dicts (tests, shells) have no dirty flag
        if hasattr(self.session, "modified"):
            self.session.modified = True

    def has(self, key: str) -> bool:
        return key in self.session

    def get(self, key: str) -> Optional[Any]:
        return self.session.get(key)

    def put(self, key: str, content: Any) -> None:
        self.session[key] = content
        self._touch()

    def remove(self, key: str) -> None:
        self.session.pop(key, None)
        self._touch()
