"""Error taxonomy for the club portal.

Backend-level failures (``DataClientError``, ``StorageError``) come out of the
data client. Management screens translate them into the user-facing taxonomy:
``FetchError`` for reads, ``WriteError`` for create/update/delete and
``UploadError`` for the two-phase upload.
"""


class PortalError(Exception):
    def __init__(self, message, entity=None):
        super().__init__(message)
        self.message = message
        self.entity = entity


class FetchError(PortalError):
    pass


class WriteError(PortalError):
    pass


class UploadError(PortalError):
    def __init__(self, message, entity=None, orphaned_key=None):
        super().__init__(message, entity)
        # storage key left behind when the compensating delete also failed
        self.orphaned_key = orphaned_key


class DataClientError(Exception):
    pass


class StorageError(DataClientError):
    pass
