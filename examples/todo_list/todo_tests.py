"""In-memory to-do list service and the execution units that exercise it."""
from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional


@dataclass
class TodoItem:
    id: int
    text: str
    complete: bool = False


InsertCallback = Callable[[Optional[TodoItem], Optional[Exception]], None]
ListCallback = Callable[[List[TodoItem], Optional[Exception]], None]


class TodoService:
    """Stores items and answers from a worker thread, like a remote table would."""

    def __init__(self, *, latency: float = 0.01) -> None:
        self._items: Dict[int, TodoItem] = {}
        self._ids = itertools.count(1)
        self._latency = latency
        self._lock = threading.Lock()

    def add_item(self, text: str, callback: InsertCallback) -> None:
        def work() -> None:
            if not text.strip():
                callback(None, ValueError("Item text cannot be empty"))
                return
            with self._lock:
                item = TodoItem(id=next(self._ids), text=text)
                self._items[item.id] = item
            callback(item, None)

        self._dispatch(work)

    def complete_item(self, item_id: int, callback: InsertCallback) -> None:
        def work() -> None:
            with self._lock:
                item = self._items.get(item_id)
                if item is not None:
                    item.complete = True
            if item is None:
                callback(None, KeyError(f"No item with id {item_id}"))
            else:
                callback(item, None)

        self._dispatch(work)

    def incomplete_items(self, callback: ListCallback) -> None:
        def work() -> None:
            with self._lock:
                items = [item for item in self._items.values() if not item.complete]
            callback(items, None)

        self._dispatch(work)

    def _dispatch(self, work: Callable[[], None]) -> None:
        timer = threading.Timer(self._latency, work)
        timer.daemon = True
        timer.start()


_service = TodoService()


def add_item(context, completion) -> None:
    text = context.param("text", "Buy milk")

    def inserted(item, error) -> None:
        if error is not None:
            completion.log(f"Insert failed: {error}")
            completion(False)
            return
        completion.log(f"Inserted item {item.id}: {item.text}")
        completion(item.text == text)

    _service.add_item(text, inserted)


def add_empty_item_is_rejected(context, completion) -> None:
    def inserted(item, error) -> None:
        if error is None:
            completion.log(f"Expected an error, got item {item.id}")
            completion(False)
            return
        completion.log(f"Got expected error: {error}")
        completion(True)

    _service.add_item("   ", inserted)


def complete_item(context, completion) -> None:
    def completed(item, error) -> None:
        if error is not None:
            completion.log(f"Complete failed: {error}")
            completion(False)
            return

        def listed(items, list_error) -> None:
            still_open = any(entry.id == item.id for entry in items)
            if still_open:
                completion.log(f"Item {item.id} still listed as incomplete")
            completion(list_error is None and not still_open)

        _service.incomplete_items(listed)

    def inserted(item, error) -> None:
        if error is not None:
            completion.log(f"Insert failed: {error}")
            completion(False)
            return
        _service.complete_item(item.id, completed)

    _service.add_item(context.param("text", "Walk the dog"), inserted)
