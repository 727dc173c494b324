from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Squad


class SquadRepository(Protocol):
    def get_by_id(self, squad_id: int) -> Optional[Squad]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Squad]:
        raise NotImplementedError
