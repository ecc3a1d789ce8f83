from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Iterator, Mapping, Optional, Union

from funnel_builder.config import settings
from funnel_builder.schemas.blocks import Block, block_id_of
from funnel_builder.schemas.funnels import FunnelDocument, FunnelMetadata
from funnel_builder.services.rules import RuleReport, lint

logger = logging.getLogger(__name__)

Listener = Callable[["FunnelStore"], None]
StoredBlock = Union[Block, Mapping[str, Any]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class _StoreState:
    document: Optional[FunnelDocument]
    metadata: FunnelMetadata


def _initial_state() -> _StoreState:
    return _StoreState(document=None, metadata=FunnelMetadata())


class FunnelStore:
    """Holds the current funnel document and its mutation metadata.

    The document and metadata live in one immutable state object that is
    swapped on every mutation, so readers never observe one without the
    other. Block-level mutations referencing missing ids or indexes, or
    issued while no document is loaded, are silent no-ops.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = _utcnow,
        lint_on_mutation: Optional[bool] = None,
    ) -> None:
        self._clock = clock
        self._lint_on_mutation = (
            settings.FUNNEL_LINT_ON_MUTATION if lint_on_mutation is None else lint_on_mutation
        )
        self._state = _initial_state()
        self._listeners: list[Listener] = []
        self._mutating = False
        self.last_report: Optional[RuleReport] = None

    @property
    def document(self) -> Optional[FunnelDocument]:
        return self._state.document

    @property
    def metadata(self) -> FunnelMetadata:
        return self._state.metadata

    @property
    def has_document(self) -> bool:
        return self._state.document is not None

    @property
    def blocks(self) -> list[StoredBlock]:
        document = self._state.document
        return list(document.blocks) if document else []

    def get_block(self, block_id: str) -> Optional[StoredBlock]:
        document = self._state.document
        return document.get_block(block_id) if document else None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def lint(self) -> Optional[RuleReport]:
        document = self._state.document
        return lint(document) if document else None

    # -- whole document -------------------------------------------------

    def set_document(self, document: FunnelDocument) -> None:
        with self._mutation():
            now = self._clock()
            previous = self._state.metadata
            self._state = _StoreState(
                document=document,
                metadata=FunnelMetadata(
                    createdAt=previous.createdAt or now,
                    lastModified=now,
                    iterations=previous.iterations + 1,
                ),
            )
            logger.debug(
                "funnel_store.document_set",
                extra={"funnelId": document.id, "iterations": previous.iterations + 1},
            )

    def hydrate(self, document: FunnelDocument, metadata: FunnelMetadata) -> None:
        """Restore a persisted document together with its stored metadata."""
        with self._mutation():
            self._state = _StoreState(document=document, metadata=metadata.model_copy())

    def update_metadata(self, **updates: Any) -> None:
        with self._mutation():
            metadata = FunnelMetadata.model_validate({**self._state.metadata.model_dump(), **updates})
            self._state = _StoreState(document=self._state.document, metadata=metadata)

    def clear(self) -> None:
        with self._mutation():
            self._state = _initial_state()
            self.last_report = None
            logger.debug("funnel_store.cleared")

    # -- block mutations ------------------------------------------------

    def update_block_props(self, block_id: str, partial_props: dict[str, Any]) -> None:
        document = self._state.document
        if document is None:
            return
        index = document.block_index(block_id)
        if index == -1:
            return
        block = document.blocks[index]
        blocks = list(document.blocks)
        if isinstance(block, Mapping):
            # Raw blocks carry no props model, so every key is merged.
            props = block.get("props")
            merged = {**(props if isinstance(props, Mapping) else {}), **partial_props}
            blocks[index] = {**block, "props": merged}
            self._replace_blocks(document, blocks)
            return
        known_fields = type(block.props).model_fields
        updates = {key: value for key, value in partial_props.items() if key in known_fields}
        if len(updates) != len(partial_props):
            logger.debug(
                "funnel_store.unknown_props_ignored",
                extra={"blockId": block_id, "keys": sorted(set(partial_props) - set(updates))},
            )
        # Editor input is trusted here; structural checks guard the producer boundary only.
        props = block.props.model_copy(update=updates)
        blocks[index] = block.model_copy(update={"props": props})
        self._replace_blocks(document, blocks)

    def delete_block(self, block_id: str) -> None:
        document = self._state.document
        if document is None or document.block_index(block_id) == -1:
            return
        blocks = [block for block in document.blocks if block_id_of(block) != block_id]
        self._replace_blocks(document, blocks)

    def reorder_blocks(self, from_index: int, to_index: int) -> None:
        document = self._state.document
        if document is None:
            return
        count = len(document.blocks)
        if not (0 <= from_index < count and 0 <= to_index < count):
            return
        blocks = list(document.blocks)
        moved = blocks.pop(from_index)
        blocks.insert(to_index, moved)
        self._replace_blocks(document, blocks)

    def insert_block(self, block: StoredBlock, index: Optional[int] = None) -> None:
        """Insert without validation; raw mappings are kept as-is and render as placeholders when unknown."""
        document = self._state.document
        if document is None:
            return
        blocks = list(document.blocks)
        blocks.insert(len(blocks) if index is None else index, block)
        self._replace_blocks(document, blocks)

    # -- internals ------------------------------------------------------

    def _replace_blocks(self, document: FunnelDocument, blocks: list[StoredBlock]) -> None:
        with self._mutation():
            metadata = self._state.metadata.model_copy(update={"lastModified": self._clock()})
            self._state = _StoreState(
                document=document.model_copy(update={"blocks": blocks}),
                metadata=metadata,
            )

    @contextmanager
    def _mutation(self) -> Iterator[None]:
        if self._mutating:
            raise RuntimeError("FunnelStore mutations must not be re-entrant")
        self._mutating = True
        try:
            yield
        finally:
            self._mutating = False
        self._after_mutation()

    def _after_mutation(self) -> None:
        if self._lint_on_mutation and self._state.document is not None:
            self.last_report = lint(self._state.document)
            if not self.last_report.valid:
                logger.info(
                    "funnel_store.rule_errors",
                    extra={"funnelId": self._state.document.id, "errors": self.last_report.errors},
                )
        for listener in list(self._listeners):
            self._mutating = True
            try:
                listener(self)
            finally:
                self._mutating = False


class FunnelStoreRegistry:
    """One store per editing session (or funnel id) for multi-session hosts."""

    def __init__(self, factory: Callable[[], FunnelStore] = FunnelStore) -> None:
        self._factory = factory
        self._stores: dict[str, FunnelStore] = {}

    def get(self, key: str) -> FunnelStore:
        store = self._stores.get(key)
        if store is None:
            store = self._factory()
            self._stores[key] = store
        return store

    def discard(self, key: str) -> None:
        store = self._stores.pop(key, None)
        if store is not None:
            store.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._stores

    def __len__(self) -> int:
        return len(self._stores)


_default_store: Optional[FunnelStore] = None


def get_funnel_store() -> FunnelStore:
    global _default_store
    if _default_store is None:
        _default_store = FunnelStore()
    return _default_store
