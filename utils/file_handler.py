# utils/file_handler.py
from __future__ import annotations
from pathlib import Path
from typing import Union
import logging
import os

from app.config import Settings
from services.catalog import DEFAULT_TEXTS, TextCatalog
from utils.db_helper import TextStore

log = logging.getLogger(__name__)


def ensure_app_files(settings: Settings):
    db_dir = os.path.dirname(settings.db_path)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)


def open_store(settings: Settings) -> TextStore:
    """Open the text store, seeding the built-in texts on first run."""
    ensure_app_files(settings)
    store = TextStore(settings.db_path)
    store.seed(t.to_record() for t in DEFAULT_TEXTS)
    return store


def load_catalog(store: TextStore) -> TextCatalog:
    rows = store.list_texts()
    if not rows:
        log.warning("Text store is empty, falling back to built-in texts")
        return TextCatalog()
    return TextCatalog.from_records(rows)


def normalize_text(text: str) -> str:
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text.strip()


def read_text_file(path: Union[str, Path]) -> str:
    return normalize_text(Path(path).read_text(encoding="utf-8"))
