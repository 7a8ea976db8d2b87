"""In-memory set of ingested files backed by a single persisted blob."""

from lossreport.logging.logger import Log
from lossreport.registry.codec import decode_registry, encode_registry
from lossreport.registry.exceptions import (
    ColumnEditError,
    FileRecordNotFoundError,
    RegistryDecodeError,
)
from lossreport.registry.models import FileRecord, Row
from lossreport.registry.storage.base import BaseBlobStore


class FileRegistry:
    """Holds the ingested FileRecords and persists every change.

    Each mutation builds a new tuple of records and writes the whole value
    back to the store; nothing is patched in place.
    """

    def __init__(self, store: BaseBlobStore) -> None:
        self._store = store
        self._files: tuple[FileRecord, ...] = ()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> "FileRegistry":
        """Reload the registry from the store. An undecodable blob starts empty."""
        blob = self._store.load()
        if blob is None:
            self._files = ()
            Log.info("No persisted registry found, starting empty")
            return self
        try:
            self._files = tuple(decode_registry(blob))
        except RegistryDecodeError as exc:
            Log.error(f"Discarding persisted registry: {exc}")
            self._files = ()
            return self
        Log.info(f"Loaded {len(self._files)} files from registry")
        return self

    @property
    def files(self) -> tuple[FileRecord, ...]:
        return self._files

    def __len__(self) -> int:
        return len(self._files)

    def get(self, file_id: str) -> FileRecord:
        """Return the record with *file_id*.

        Raises:
            FileRecordNotFoundError: if no such file is registered.
        """
        for record in self._files:
            if record.id == file_id:
                return record
        raise FileRecordNotFoundError(f"File {file_id} not found")

    # ------------------------------------------------------------------
    # Whole-file mutations
    # ------------------------------------------------------------------

    def add(self, record: FileRecord) -> FileRecord:
        """Append *record*.

        A file with the same name, kind and upload month is replaced in place,
        so re-uploading a month overwrites it while other months are kept.
        """
        files = list(self._files)
        for index, existing in enumerate(files):
            if (
                existing.name == record.name
                and existing.kind == record.kind
                and existing.period_key == record.period_key
            ):
                files[index] = record
                self._commit(files)
                Log.info(f"Replaced file '{record.name}'", file_id=record.id, kind=record.kind.value)
                return record
        files.append(record)
        self._commit(files)
        Log.info(f"Added file '{record.name}'", file_id=record.id, rows=len(record.rows))
        return record

    def remove(self, file_id: str) -> FileRecord:
        record = self.get(file_id)
        self._commit([f for f in self._files if f.id != file_id])
        Log.info(f"Removed file '{record.name}'", file_id=file_id)
        return record

    def rename(self, file_id: str, name: str) -> FileRecord:
        if not name.strip():
            raise ValueError("File name must not be empty")
        return self._replace(self.get(file_id).with_name(name.strip()))

    def replace_rows(self, file_id: str, rows: list[Row]) -> FileRecord:
        return self._replace(self.get(file_id).with_rows(rows))

    # ------------------------------------------------------------------
    # Column edits
    # ------------------------------------------------------------------

    def rename_column(self, file_id: str, old: str, new: str) -> FileRecord:
        """Rename a column in every row, keeping the column order.

        Raises:
            ColumnEditError: if *old* is missing, *new* is blank or already used.
        """
        record = self.get(file_id)
        new = new.strip()
        columns = record.columns
        if old not in columns:
            raise ColumnEditError(f"Column '{old}' not found in file {file_id}")
        if not new or new == old:
            raise ColumnEditError("New column name is empty or unchanged")
        if new in columns:
            raise ColumnEditError(f"Column '{new}' already exists in file {file_id}")
        rows = [
            {(new if key == old else key): value for key, value in row.items()}
            for row in record.rows
        ]
        return self._replace(record.with_rows(rows))

    def add_column(self, file_id: str, name: str) -> FileRecord:
        record = self.get(file_id)
        name = name.strip()
        if not name:
            raise ColumnEditError("Column name must not be empty")
        if name in record.columns:
            raise ColumnEditError(f"Column '{name}' already exists in file {file_id}")
        rows = [{**row, name: None} for row in record.rows]
        return self._replace(record.with_rows(rows))

    def remove_column(self, file_id: str, name: str) -> FileRecord:
        record = self.get(file_id)
        if name not in record.columns:
            raise ColumnEditError(f"Column '{name}' not found in file {file_id}")
        rows = [{key: value for key, value in row.items() if key != name} for row in record.rows]
        return self._replace(record.with_rows(rows))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _replace(self, record: FileRecord) -> FileRecord:
        self._commit([record if f.id == record.id else f for f in self._files])
        Log.info(f"Updated file '{record.name}'", file_id=record.id)
        return record

    def _commit(self, files: list[FileRecord]) -> None:
        """Persist first so a failed write leaves the in-memory registry unchanged."""
        self._store.save(encode_registry(files))
        self._files = tuple(files)
