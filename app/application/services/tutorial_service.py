"""Tutorial progress per principal: load, apply action, save."""

from __future__ import annotations

import logging

from app.application.interfaces.services import IKeyValueStore
from app.core.constants import CACHE_KEY_SEP
from app.domain.entities.tutorial import (
    INITIAL_STATE,
    TutorialAction,
    TutorialState,
    deserialize,
    reduce,
    serialize,
)

logger = logging.getLogger(__name__)


class TutorialService:
    """Persist tutorial state under '<storage_key>:<principal_id>'."""

    def __init__(
        self,
        store: IKeyValueStore,
        storage_key: str,
        ttl_seconds: int,
    ) -> None:
        self._store = store
        self._storage_key = storage_key
        self._ttl_seconds = ttl_seconds

    def _key(self, principal_id: str) -> str:
        return f"{self._storage_key}{CACHE_KEY_SEP}{principal_id}"

    async def get_state(self, principal_id: str) -> TutorialState:
        """Return stored state, or the initial state when none is stored."""
        payload = await self._store.get(self._key(principal_id))
        if payload is None:
            return INITIAL_STATE
        return deserialize(payload)

    async def apply(self, principal_id: str, action: TutorialAction) -> TutorialState:
        """Reduce the stored state with action and persist the result."""
        state = await self.get_state(principal_id)
        new_state = reduce(state, action)
        if new_state != state:
            stored = await self._store.set(
                self._key(principal_id), serialize(new_state), ttl=self._ttl_seconds
            )
            if not stored:
                logger.warning("Tutorial state not persisted for principal %s", principal_id)
        return new_state

    async def reset(self, principal_id: str) -> None:
        """Forget stored progress."""
        await self._store.delete(self._key(principal_id))
