"""Persistent dashboard state: layouts, module sizes and search history.

Each manager reads its value from a :class:`StateStore` once at construction
and writes it back on every change. A stored value that is missing, corrupt
or fails validation is replaced by the default.
"""

import dataclasses
import json
import logging
import time
import uuid
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Literal, Protocol

from pydantic import BaseModel, Field, RootModel, ValidationError

from ambos.data import Article

logger = logging.getLogger(__name__)

LAYOUT_KEY = "ambos-layout-config"
SAVED_LAYOUTS_KEY = "ambos-saved-layouts"
MODULE_SIZES_KEY = "ambos-module-sizes"
SEARCH_HISTORY_KEY = "ambos-search-history"

MAX_HISTORY = 10

ModuleSize = Literal["small", "medium", "large"]
DEFAULT_MODULE_SIZE: ModuleSize = "medium"


class StateStore(Protocol):
    """Key-value persistence for JSON-compatible values."""

    def load(self, key: str) -> Any | None:
        """Return the stored value, or None if absent or unreadable."""
        ...

    def save(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    """In-process store, mainly for tests and one-shot runs."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def load(self, key: str) -> Any | None:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def save(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """Store each key as ``<directory>/<key>.json``.

    Args:
        directory: Directory holding the state files (created on first save).
    """

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    def _path(self, key: str) -> Path:
        return self._directory / f"{key}.json"

    def load(self, key: str) -> Any | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read state {key!r}: {e}")
            return None

    def save(self, key: str, value: Any) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(json.dumps(value, indent=2, ensure_ascii=False))

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class ModuleDimensions(BaseModel):
    height: int
    width: int


class LayoutConfig(BaseModel):
    """Order of dashboard modules and their pixel sizes."""

    module_order: list[str]
    module_sizes: dict[str, ModuleDimensions] = Field(default_factory=dict)


DEFAULT_LAYOUT = LayoutConfig(
    module_order=[
        "summary",
        "map",
        "timeline",
        "predictions",
        "entities",
        "network-graph",
        "datafeed",
    ],
    module_sizes={
        "datafeed": ModuleDimensions(height=345, width=486),
        "map": ModuleDimensions(height=345, width=916),
        "network-graph": ModuleDimensions(height=345, width=448),
        "predictions": ModuleDimensions(height=345, width=460),
        "timeline": ModuleDimensions(height=345, width=486),
    },
)


def _load_model(store: StateStore, key: str, model: type[BaseModel]) -> Any | None:
    raw = store.load(key)
    if raw is None:
        return None
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        logger.warning(f"Ignoring invalid stored state {key!r}: {e}")
        return None


class LayoutManager:
    """Current dashboard layout."""

    def __init__(self, store: StateStore) -> None:
        self._store = store
        loaded = _load_model(store, LAYOUT_KEY, LayoutConfig)
        self._layout: LayoutConfig = loaded or DEFAULT_LAYOUT.model_copy(deep=True)

    @property
    def layout(self) -> LayoutConfig:
        return self._layout

    def _persist(self) -> None:
        self._store.save(LAYOUT_KEY, self._layout.model_dump())

    def update(
        self,
        module_order: Sequence[str],
        module_sizes: dict[str, ModuleDimensions] | None = None,
    ) -> LayoutConfig:
        """Set a new module order; sizes are kept unless new ones are given."""
        self._layout = LayoutConfig(
            module_order=list(module_order),
            module_sizes=module_sizes if module_sizes is not None else self._layout.module_sizes,
        )
        self._persist()
        return self._layout

    def reset(self) -> LayoutConfig:
        self._layout = DEFAULT_LAYOUT.model_copy(deep=True)
        self._persist()
        return self._layout


class SavedLayout(LayoutConfig):
    name: str
    timestamp: float


class _SavedLayoutList(RootModel[list[SavedLayout]]):
    pass


class SavedLayouts:
    """Named layouts; saving under an existing name replaces it."""

    def __init__(self, store: StateStore) -> None:
        self._store = store
        loaded = _load_model(store, SAVED_LAYOUTS_KEY, _SavedLayoutList)
        self._layouts: list[SavedLayout] = loaded.root if loaded else []

    @property
    def layouts(self) -> list[SavedLayout]:
        return list(self._layouts)

    def _persist(self) -> None:
        self._store.save(SAVED_LAYOUTS_KEY, [layout.model_dump() for layout in self._layouts])

    def save(self, name: str, layout: LayoutConfig) -> SavedLayout:
        saved = SavedLayout(
            name=name,
            module_order=list(layout.module_order),
            module_sizes=dict(layout.module_sizes),
            timestamp=time.time(),
        )
        self._layouts = [s for s in self._layouts if s.name != name] + [saved]
        self._persist()
        return saved

    def delete(self, name: str) -> None:
        self._layouts = [s for s in self._layouts if s.name != name]
        self._persist()

    def get(self, name: str) -> SavedLayout | None:
        return next((s for s in self._layouts if s.name == name), None)


class _SizeMap(RootModel[dict[str, ModuleSize]]):
    pass


class ModuleSizes:
    """Coarse size (small, medium or large) of each module."""

    def __init__(self, store: StateStore) -> None:
        self._store = store
        loaded = _load_model(store, MODULE_SIZES_KEY, _SizeMap)
        self._sizes: dict[str, ModuleSize] = loaded.root if loaded else {}

    @property
    def sizes(self) -> dict[str, ModuleSize]:
        return dict(self._sizes)

    def get(self, module_id: str) -> ModuleSize:
        return self._sizes.get(module_id, DEFAULT_MODULE_SIZE)

    def update(self, module_id: str, size: ModuleSize) -> None:
        if size not in ("small", "medium", "large"):
            raise ValueError(f"Unknown module size: {size!r}")
        self._sizes[module_id] = size
        self._store.save(MODULE_SIZES_KEY, self._sizes)


class SearchHistoryItem(BaseModel):
    id: str
    query: str
    language: str
    articles: list[dict[str, Any]] = Field(default_factory=list)
    analysis: dict[str, Any] | None = None
    timestamp: float


class _HistoryList(RootModel[list[SearchHistoryItem]]):
    pass


class SearchHistory:
    """Recent searches, newest first, with back/forward navigation.

    Index 0 is the newest entry. ``back`` moves towards older entries and
    ``forward`` towards newer ones. Adding a search makes it current.
    """

    def __init__(self, store: StateStore, *, max_items: int = MAX_HISTORY) -> None:
        self._store = store
        self._max_items = max_items
        loaded = _load_model(store, SEARCH_HISTORY_KEY, _HistoryList)
        self._items: list[SearchHistoryItem] = loaded.root[:max_items] if loaded else []
        self._index = -1

    @property
    def items(self) -> list[SearchHistoryItem]:
        return list(self._items)

    @property
    def current(self) -> SearchHistoryItem | None:
        return self._items[self._index] if self._index >= 0 else None

    @property
    def can_go_back(self) -> bool:
        return self._index < len(self._items) - 1

    @property
    def can_go_forward(self) -> bool:
        return self._index > 0

    def add(
        self,
        query: str,
        *,
        language: str = "en",
        articles: Sequence[Article] = (),
        analysis: BaseModel | None = None,
    ) -> SearchHistoryItem:
        item = SearchHistoryItem(
            id=uuid.uuid4().hex,
            query=query,
            language=language,
            articles=[dataclasses.asdict(a) for a in articles],
            analysis=analysis.model_dump(mode="json") if analysis is not None else None,
            timestamp=time.time(),
        )
        self._items = [item, *self._items][: self._max_items]
        self._index = 0
        self._store.save(SEARCH_HISTORY_KEY, [i.model_dump(mode="json") for i in self._items])
        return item

    def back(self) -> SearchHistoryItem | None:
        if not self.can_go_back:
            return None
        self._index += 1
        return self._items[self._index]

    def forward(self) -> SearchHistoryItem | None:
        if not self.can_go_forward:
            return None
        self._index -= 1
        return self._items[self._index]

    def clear(self) -> None:
        self._items = []
        self._index = -1
        self._store.delete(SEARCH_HISTORY_KEY)
