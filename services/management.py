"""
Generic list/create/update/delete flow shared by all admin screens.

A screen is built per request with the data client and the caller's
AuthContext. It keeps the state a management page renders: the fetched
``items``, the ``form`` values, the ``editing_id`` when in edit mode and the
``notifications`` to flash to the user.

Two layers of methods:

* ``list`` / ``create`` / ``update`` / ``delete`` (and ``upload`` on upload
  screens) talk to the backend and raise ``FetchError`` / ``WriteError`` /
  ``UploadError``.
* ``refresh`` / ``submit`` / ``confirm_delete`` / ``submit_upload`` are the
  user actions. They catch those errors, log them, add a notification and
  leave the previous list or the typed-in form untouched. After a successful
  write they re-run ``list`` instead of patching ``items`` locally.
"""

import logging
import time
from dataclasses import dataclass
from urllib.parse import urlparse

from services.errors import DataClientError, FetchError, StorageError, UploadError, WriteError
from services.timeconv import from_local_input, to_local_input

logger = logging.getLogger(__name__)


@dataclass
class Notification:
    level: str  # success / error / info
    message: str


def normalize_optional(value):
    if value is None or value == "":
        return None
    return value


def is_safe_link(value):
    """http(s) URLs and site-relative paths only (no javascript:, data: ...)."""
    if value.startswith("/") and not value.startswith("//"):
        return True
    return urlparse(value).scheme.lower() in ("http", "https")


class ManagementScreen:
    table = None
    label = "Item"            # "Event", "Team member" ...
    plural = "items"          # used in "Failed to load events"
    order_column = "created_at"
    ascending = True
    fields = ()
    optional_fields = ()
    datetime_fields = ()
    link_fields = ()          # rendered into href / src
    stamp_field = None        # created_by / uploaded_by

    def __init__(self, client, auth, tz_name="UTC"):
        self.client = client
        self.auth = auth
        self.tz_name = tz_name
        self.items = []
        self.form = self.blank_form()
        self.editing_id = None
        self.notifications = []

    # ---------------------------
    # state helpers
    # ---------------------------
    def blank_form(self):
        return {name: "" for name in self.fields}

    def notify(self, level, message):
        self.notifications.append(Notification(level, message))

    def reset_form(self):
        self.form = self.blank_form()
        self.editing_id = None

    @property
    def is_editing(self):
        return self.editing_id is not None

    # ---------------------------
    # backend operations
    # ---------------------------
    def list(self):
        try:
            return (
                self.client.table(self.table)
                .select()
                .order(self.order_column, ascending=self.ascending)
                .execute()
            )
        except DataClientError as e:
            raise FetchError(f"Failed to load {self.plural}", self.table) from e

    def get(self, item_id):
        try:
            rows = self.client.table(self.table).select().eq("id", item_id).execute()
        except DataClientError as e:
            raise FetchError(f"Failed to load {self.label.lower()}", self.table) from e
        return rows[0] if rows else None

    def to_record(self, fields, existing=None):
        """Turn submitted form values into a row dict for the backend."""
        record = {}
        for name in self.fields:
            value = fields.get(name, "")
            if name in self.datetime_fields:
                if existing is not None and value == to_local_input(existing.get(name), self.tz_name):
                    # untouched in the form, keep the stored instant as-is
                    record[name] = existing.get(name)
                    continue
                try:
                    value = from_local_input(value, self.tz_name)
                except ValueError as e:
                    raise WriteError(str(e), self.table) from e
            elif name in self.optional_fields:
                value = normalize_optional(value)
            if name in self.link_fields and value is not None and not is_safe_link(value):
                raise WriteError(f"{name.replace('_', ' ').capitalize()} must be an http(s) link", self.table)
            record[name] = value
        if self.stamp_field and existing is None and self.auth.user_id is not None:
            record[self.stamp_field] = self.auth.user_id
        return record

    def create(self, fields):
        record = self.to_record(fields)
        try:
            rows = self.client.table(self.table).insert(record).execute()
        except DataClientError as e:
            raise WriteError(f"Failed to save {self.label.lower()}", self.table) from e
        return rows[0]

    def update(self, item_id, fields):
        try:
            existing = self.get(item_id)
        except FetchError as e:
            raise WriteError(f"Failed to save {self.label.lower()}", self.table) from e
        if existing is None:
            raise WriteError(f"{self.label} {item_id} does not exist", self.table)
        record = self.to_record(fields, existing)
        try:
            rows = self.client.table(self.table).update(record).eq("id", item_id).execute()
        except DataClientError as e:
            raise WriteError(f"Failed to save {self.label.lower()}", self.table) from e
        if not rows:
            raise WriteError(f"{self.label} {item_id} does not exist", self.table)
        return rows[0]

    def delete(self, item_id):
        try:
            rows = self.client.table(self.table).delete().eq("id", item_id).execute()
        except DataClientError as e:
            raise WriteError(f"Failed to delete {self.label.lower()}", self.table) from e
        if not rows:
            raise WriteError(f"{self.label} {item_id} does not exist", self.table)
        return rows[0]

    # ---------------------------
    # user actions
    # ---------------------------
    def refresh(self):
        try:
            self.items = self.list()
        except FetchError as e:
            logger.error("Error fetching %s: %s", self.table, e.__cause__ or e)
            self.notify("error", e.message)
            return False
        return True

    def form_from_record(self, record):
        form = {}
        for name in self.fields:
            value = record.get(name)
            if name in self.datetime_fields:
                form[name] = to_local_input(value, self.tz_name)
            else:
                form[name] = "" if value is None else value
        return form

    def begin_edit(self, item_id):
        try:
            record = self.get(item_id)
        except FetchError as e:
            logger.error("Error loading %s %s: %s", self.table, item_id, e.__cause__ or e)
            self.notify("error", e.message)
            return False
        if record is None:
            self.notify("error", f"{self.label} not found")
            return False
        self.editing_id = record["id"]
        self.form = self.form_from_record(record)
        return True

    def submit(self, fields):
        editing = self.is_editing
        try:
            if editing:
                self.update(self.editing_id, fields)
            else:
                self.create(fields)
        except WriteError as e:
            logger.error("Error saving %s: %s", self.table, e.__cause__ or e)
            self.form = {name: fields.get(name, "") for name in self.fields}
            self.notify("error", e.message)
            return False
        self.notify("success", f"{self.label} {'updated' if editing else 'created'} successfully")
        self.reset_form()
        self.refresh()
        return True

    def confirm_delete(self, item_id, confirmed=False):
        if not confirmed:
            self.notify("info", f"Deletion of {self.label.lower()} was not confirmed")
            return False
        try:
            self.delete(item_id)
        except WriteError as e:
            logger.error("Error deleting %s %s: %s", self.table, item_id, e.__cause__ or e)
            self.notify("error", e.message)
            return False
        self.notify("success", f"{self.label} deleted successfully")
        self.refresh()
        return True


class UploadScreen(ManagementScreen):
    """Screens whose rows point at a blob in a storage bucket."""

    bucket = None
    url_field = None
    order_column = "created_at"
    ascending = False
    stamp_field = "uploaded_by"

    def __init__(self, client, auth, tz_name="UTC", clock=None):
        super().__init__(client, auth, tz_name)
        self.clock = clock or time.time

    def storage_key(self, filename):
        millis = int(self.clock() * 1000)
        ext = filename.rsplit(".", 1)[-1] if "." in filename else ""
        return f"{millis}.{ext}" if ext else str(millis)

    @staticmethod
    def key_from_url(url):
        return url.rstrip("/").split("/")[-1] if url else None

    def upload_record(self, title, description, url, content_type):
        raise NotImplementedError

    def upload(self, data, filename, content_type=None, title="", description=None):
        bucket = self.client.storage.from_(self.bucket)
        key = self.storage_key(filename)

        # Phase 1: blob
        try:
            bucket.upload(key, data)
        except StorageError as e:
            raise UploadError(f"Failed to upload {self.label.lower()}", self.table) from e
        url = bucket.get_public_url(key)

        # Phase 2: metadata row
        record = self.upload_record(title, normalize_optional(description), url, content_type)
        if self.auth.user_id is not None:
            record[self.stamp_field] = self.auth.user_id
        try:
            rows = self.client.table(self.table).insert(record).execute()
        except DataClientError as e:
            orphan = self._compensate(bucket, key)
            raise UploadError(f"Failed to upload {self.label.lower()}", self.table, orphaned_key=orphan) from e
        return rows[0]

    def _compensate(self, bucket, key):
        """Remove the blob of a failed upload. Returns the key if it stayed behind."""
        try:
            bucket.remove([key])
        except StorageError as e:
            logger.warning("Orphaned blob '%s' in bucket '%s': %s", key, self.bucket, e)
            return key
        return None

    def submit_upload(self, data, filename, content_type=None, title="", description=None):
        try:
            self.upload(data, filename, content_type, title, description)
        except UploadError as e:
            logger.error("Error uploading to %s: %s", self.bucket, e.__cause__ or e)
            self.form = {name: "" for name in self.fields}
            self.form["title"] = title
            if "description" in self.form:
                self.form["description"] = description or ""
            self.notify("error", e.message)
            return False
        self.notify("success", f"{self.label} uploaded successfully")
        self.reset_form()
        self.refresh()
        return True

    def delete(self, item_id):
        row = super().delete(item_id)
        key = self.key_from_url(row.get(self.url_field))
        if key:
            try:
                self.client.storage.from_(self.bucket).remove([key])
            except StorageError as e:
                logger.warning("Orphaned blob '%s' in bucket '%s': %s", key, self.bucket, e)
        return row
