"""
Table/storage gateway used by every screen and display page.

The query surface mirrors a hosted backend client:

    client.table("events").select().order("event_date").execute()
    client.table("events").insert({...}).execute()
    client.table("events").update({...}).eq("id", 3).execute()
    client.table("events").delete().eq("id", 3).execute()
    client.storage.from_("gallery").upload("1700000000000.png", fileobj)

Rows travel as plain dicts. Writes commit immediately, so a read issued right
after a write sees it.
"""

import logging
import os
import shutil

from sqlalchemy.exc import SQLAlchemyError

from models.content import Event, ClubFile, GalleryImage, Coordinator, ClubInfo
from models.users import Profile
from services.errors import DataClientError, StorageError

logger = logging.getLogger(__name__)

TABLES = {
    "events": Event,
    "files": ClubFile,
    "gallery": GalleryImage,
    "coordinators": Coordinator,
    "club_info": ClubInfo,
    "profiles": Profile,
}


def row_to_dict(obj):
    data = {}
    for column in obj.__table__.columns:
        value = getattr(obj, column.name)
        # Enum column (profiles.role) ko plain string bana do
        data[column.name] = getattr(value, "value", value)
    return data


class TableQuery:
    def __init__(self, db, name):
        if name not in TABLES:
            raise DataClientError(f"Unknown table '{name}'")
        self.db = db
        self.name = name
        self.model = TABLES[name]
        self._action = "select"
        self._values = None
        self._filters = []
        self._ordering = []

    # --- builders ---
    def select(self):
        self._action = "select"
        return self

    def insert(self, values):
        self._action = "insert"
        self._values = dict(values)
        return self

    def update(self, values):
        self._action = "update"
        self._values = dict(values)
        return self

    def delete(self):
        self._action = "delete"
        return self

    def eq(self, column, value):
        self._filters.append((self._column(column), value))
        return self

    def order(self, column, ascending=True):
        self._ordering.append((self._column(column), ascending))
        return self

    def _column(self, name):
        if name not in self.model.__table__.columns:
            raise DataClientError(f"Column '{name}' does not exist on '{self.name}'")
        return getattr(self.model, name)

    def _check_values(self):
        for key in self._values:
            if key in ("id", "created_at", "updated_at"):
                raise DataClientError(f"'{key}' is assigned by the database")
            self._column(key)

    # --- execution ---
    def execute(self):
        try:
            if self._action == "select":
                return self._run_select()
            if self._action == "insert":
                return self._run_insert()
            if self._action == "update":
                return self._run_update()
            return self._run_delete()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("%s on '%s' failed: %s", self._action, self.name, e)
            raise DataClientError(f"{self._action} on '{self.name}' failed") from e

    def _query(self):
        query = self.db.query(self.model)
        for column, value in self._filters:
            query = query.filter(column == value)
        return query

    def _run_select(self):
        query = self._query()
        for column, ascending in self._ordering:
            query = query.order_by(column.asc() if ascending else column.desc())
        if self._ordering:
            # Same value wale rows ka order stable rahe
            query = query.order_by(self.model.id.asc() if self._ordering[0][1] else self.model.id.desc())
        return [row_to_dict(obj) for obj in query.all()]

    def _run_insert(self):
        self._check_values()
        obj = self.model(**self._values)
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return [row_to_dict(obj)]

    def _run_update(self):
        self._check_values()
        objs = self._query().all()
        for obj in objs:
            for key, value in self._values.items():
                setattr(obj, key, value)
        self.db.commit()
        for obj in objs:
            self.db.refresh(obj)
        return [row_to_dict(obj) for obj in objs]

    def _run_delete(self):
        objs = self._query().all()
        deleted = [row_to_dict(obj) for obj in objs]
        for obj in objs:
            self.db.delete(obj)
        self.db.commit()
        return deleted


class StorageBucket:
    def __init__(self, root, url_prefix, name):
        self.name = name
        self.directory = os.path.join(root, name)
        self.url_prefix = url_prefix

    def _path(self, key):
        if not key or key != os.path.basename(key) or key.startswith("."):
            raise StorageError(f"Invalid storage key '{key}'")
        return os.path.join(self.directory, key)

    def upload(self, key, data):
        """Store ``data`` (bytes or a readable file object) under ``key``.

        Existing keys are never overwritten.
        """
        path = self._path(key)
        try:
            os.makedirs(self.directory, exist_ok=True)
            with open(path, "xb") as buffer:
                if isinstance(data, (bytes, bytearray)):
                    buffer.write(data)
                else:
                    shutil.copyfileobj(data, buffer)
        except FileExistsError as e:
            raise StorageError(f"'{key}' already exists in bucket '{self.name}'") from e
        except OSError as e:
            # adhi likhi file chhodo mat, warna key hamesha ke liye occupied
            self._discard(path)
            raise StorageError(f"Could not store '{key}' in bucket '{self.name}': {e}") from e
        return key

    def _discard(self, path):
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove partial blob '%s': %s", path, e)

    def get_public_url(self, key):
        return f"{self.url_prefix}/{self.name}/{key}"

    def exists(self, key):
        return os.path.exists(self._path(key))

    def remove(self, keys):
        removed = []
        for key in keys:
            path = self._path(key)
            try:
                os.remove(path)
                removed.append(key)
            except FileNotFoundError:
                logger.warning("Blob '%s' not found in bucket '%s'", key, self.name)
            except OSError as e:
                raise StorageError(f"Could not remove '{key}' from bucket '{self.name}': {e}") from e
        return removed


class Storage:
    def __init__(self, root, url_prefix="/static/uploads"):
        self.root = root
        self.url_prefix = url_prefix.rstrip("/")

    def from_(self, bucket):
        return StorageBucket(self.root, self.url_prefix, bucket)


class DataClient:
    def __init__(self, db, storage):
        self.db = db
        self.storage = storage

    def table(self, name):
        return TableQuery(self.db, name)
