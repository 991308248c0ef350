from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

from docsync.core.types.blocks import DisplayBlock
from docsync.utils.logger import logger


class CorrespondenceIndex:
    """Maps source-node ids to the id of the display block that owns them.

    Built once per block list. When the same source id appears in more than
    one block (a reference repeated in the graph) the first block wins, so a
    click lands on the earliest occurrence in reading order rather than the
    last one.
    """

    def __init__(self, blocks: Iterable[DisplayBlock]) -> None:
        self._owner: Dict[str, str] = {}
        self._blocks: Dict[str, DisplayBlock] = {}
        for block in blocks:
            self._blocks.setdefault(block.id, block)
            for source_id in block.source_ids:
                self._owner.setdefault(source_id, block.id)

    def resolve(self, source_id: str) -> str:
        """Return the owning block id, or ``source_id`` itself when unknown."""
        block_id = self._owner.get(source_id)
        if block_id is None:
            logger.debug("No block owns %r; using it as a block id", source_id)
            return source_id
        return block_id

    def get(self, source_id: str) -> Optional[str]:
        return self._owner.get(source_id)

    def block(self, block_id: str) -> Optional[DisplayBlock]:
        return self._blocks.get(block_id)

    def source_ids(self, block_id: str) -> Tuple[str, ...]:
        block = self._blocks.get(block_id)
        return block.source_ids if block is not None else ()

    def anchor_id(self, block_id: str) -> str:
        """First source id of ``block_id``; used to locate it in the page view."""
        ids = self.source_ids(block_id)
        return ids[0] if ids else block_id

    def __contains__(self, source_id: object) -> bool:
        return source_id in self._owner

    def __len__(self) -> int:
        return len(self._owner)
