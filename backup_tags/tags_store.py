"""
File-based store for tags and their associations with backups and saves.

Every operation loads tags.json fresh, validates, mutates and writes the whole
document back; nothing is cached between calls. A process-wide lock serializes
the load-mutate-save cycles so concurrent callers in one process do not lose
updates. Writes go to a temp file that is renamed over tags.json.
"""
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from backup_tags.colors import validate_color
from backup_tags.config import get_config_dir
from backup_tags.errors import (
    DuplicateTagError,
    FileOpError,
    JsonError,
    TagNotFoundError,
    TagsError,
)
from backup_tags.models import (
    Tag,
    TagAssociation,
    TagsDatabase,
    backup_target,
    save_target,
    target_key,
)

logger = logging.getLogger(__name__)

TAGS_DB_FILE_NAME = "tags.json"

# Shared by every TagStore: one lock for all cycles in this process.
_DB_LOCK = threading.RLock()


def get_tags_db_path() -> Path:
    try:
        config_dir = get_config_dir()
    except OSError as e:
        raise FileOpError(e) from e
    return config_dir / TAGS_DB_FILE_NAME


class TagStore:
    """Tag operations against one tags.json file. Holds only the file path."""

    def __init__(self, path):
        self.path = Path(path)

    # --- Load / save ---

    def load(self) -> TagsDatabase:
        """Load the database; a missing file is the empty database."""
        if not self.path.exists():
            return TagsDatabase()
        try:
            content = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileOpError(e) from e
        try:
            db = TagsDatabase.model_validate(json.loads(content))
        except (json.JSONDecodeError, ValidationError, RecursionError) as e:
            raise JsonError(e) from e
        logger.debug("Loaded %d tags, %d associations from %s", len(db.tags), len(db.associations), self.path)
        return db

    def save(self, db: TagsDatabase) -> None:
        try:
            content = json.dumps(db.model_dump(mode="json"), indent=2)
        except (TypeError, ValueError) as e:
            raise JsonError(e) from e
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=".tags-",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(content)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise FileOpError(e) from e
        logger.debug("Saved tags database to %s", self.path)

    # --- Tags ---

    def create_tag(self, name: str, color: str) -> Tag:
        color = validate_color(color)
        with _DB_LOCK:
            db = self.load()
            if db.has_tag(name):
                raise DuplicateTagError(name)
            tag = Tag(name=name, color=color)
            db.tags.append(tag)
            self.save(db)
        logger.info("Created tag %r (%s)", name, color)
        return tag

    def delete_tag(self, name: str) -> None:
        """Delete a tag and purge it from every association."""
        with _DB_LOCK:
            db = self.load()
            if not db.has_tag(name):
                raise TagNotFoundError(name)
            db.tags = [t for t in db.tags if t.name != name]
            for association in db.associations:
                association.tag_names = [n for n in association.tag_names if n != name]
            db.prune_empty_associations()
            self.save(db)
        logger.info("Deleted tag %r", name)

    def get_all_tags(self) -> list[Tag]:
        return self.load().tags

    # --- Associations ---

    def add_tags(self, target, tag_names: list[str]) -> None:
        """Attach tags to a target. All names must exist or nothing changes."""
        if not tag_names:
            return
        with _DB_LOCK:
            db = self.load()
            for name in tag_names:
                if not db.has_tag(name):
                    raise TagNotFoundError(name)
            association = db.find_association(target)
            if association is None:
                association = TagAssociation(target=target, tag_names=[])
                db.associations.append(association)
            for name in tag_names:
                if name not in association.tag_names:
                    association.tag_names.append(name)
            self.save(db)
        logger.info("Tagged %s with %s", target_key(target), tag_names)

    def remove_tags(self, target, tag_names: list[str]) -> None:
        """Detach tags from a target. An unreadable database counts as nothing to remove."""
        if not tag_names:
            return
        with _DB_LOCK:
            try:
                db = self.load()
            except TagsError as e:
                logger.warning("Skipping tag removal for %s, database unreadable: %s", target_key(target), e)
                return
            association = db.find_association(target)
            if association is not None:
                association.tag_names = [n for n in association.tag_names if n not in tag_names]
            db.prune_empty_associations()
            self.save(db)
        logger.info("Untagged %s: %s", target_key(target), tag_names)

    def get_tags(self, target) -> list[Tag]:
        """Tags attached to a target, in attach order. Names with no tag are skipped."""
        db = self.load()
        association = db.find_association(target)
        if association is None:
            return []
        result = []
        for name in association.tag_names:
            tag = db.find_tag(name)
            if tag is not None:
                result.append(tag)
        return result

    # --- Backup / save targets ---

    def add_tags_to_backup(self, save_name: str, backup_name: str, tag_names: list[str]) -> None:
        self.add_tags(backup_target(save_name, backup_name), tag_names)

    def remove_tags_from_backup(self, save_name: str, backup_name: str, tag_names: list[str]) -> None:
        self.remove_tags(backup_target(save_name, backup_name), tag_names)

    def get_backup_tags(self, save_name: str, backup_name: str) -> list[Tag]:
        return self.get_tags(backup_target(save_name, backup_name))

    def add_tags_to_save(self, relative_path: str, tag_names: list[str]) -> None:
        self.add_tags(save_target(relative_path), tag_names)

    def remove_tags_from_save(self, relative_path: str, tag_names: list[str]) -> None:
        self.remove_tags(save_target(relative_path), tag_names)

    def get_save_tags(self, relative_path: str) -> list[Tag]:
        return self.get_tags(save_target(relative_path))


def _store() -> TagStore:
    return TagStore(get_tags_db_path())


# Module-level API: resolve the config path on every call.

def load_tags_db() -> TagsDatabase:
    return _store().load()


def save_tags_db(db: TagsDatabase) -> None:
    _store().save(db)


def create_tag(name: str, color: str) -> Tag:
    return _store().create_tag(name, color)


def delete_tag(name: str) -> None:
    _store().delete_tag(name)


def get_all_tags() -> list[Tag]:
    return _store().get_all_tags()


def add_tags_to_backup(save_name: str, backup_name: str, tag_names: list[str]) -> None:
    _store().add_tags_to_backup(save_name, backup_name, tag_names)


def _lenient_store() -> Optional[TagStore]:
    # Remove paths treat an unresolvable config dir like an unreadable database.
    try:
        return _store()
    except TagsError as e:
        logger.warning("Skipping tag removal, database path unavailable: %s", e)
        return None


def remove_tags_from_backup(save_name: str, backup_name: str, tag_names: list[str]) -> None:
    if not tag_names:
        return
    store = _lenient_store()
    if store is not None:
        store.remove_tags_from_backup(save_name, backup_name, tag_names)


def get_backup_tags(save_name: str, backup_name: str) -> list[Tag]:
    return _store().get_backup_tags(save_name, backup_name)


def add_tags_to_save(relative_path: str, tag_names: list[str]) -> None:
    _store().add_tags_to_save(relative_path, tag_names)


def remove_tags_from_save(relative_path: str, tag_names: list[str]) -> None:
    if not tag_names:
        return
    store = _lenient_store()
    if store is not None:
        store.remove_tags_from_save(relative_path, tag_names)


def get_save_tags(relative_path: str) -> list[Tag]:
    return _store().get_save_tags(relative_path)
