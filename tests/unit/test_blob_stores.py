from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from lossreport.registry.storage.factory import BlobStoreFactory
from lossreport.registry.storage.file_store import FileBlobStore
from lossreport.registry.storage.memory_store import MemoryBlobStore
from lossreport.registry.storage.postgres_store import PostgresBlobStore


def _mock_connection(mock_get_conn: MagicMock) -> tuple[MagicMock, MagicMock]:
    """Wire up a mock connection + cursor and return (mock_conn, mock_cursor)."""
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


class TestMemoryBlobStore:
    def test_round_trips(self) -> None:
        store = MemoryBlobStore()
        assert store.load() is None

        store.save(b"[]")

        assert store.load() == b"[]"


class TestFileBlobStore:
    def test_missing_file_loads_none(self, tmp_path: Path) -> None:
        assert FileBlobStore(tmp_path / "registry.json").load() is None

    def test_save_creates_parent_dirs(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "registry.json"
        store = FileBlobStore(path)

        store.save(b"[1]")

        assert path.read_bytes() == b"[1]"
        assert not (tmp_path / "nested" / "registry.json.tmp").exists()

    def test_save_replaces_previous_value(self, tmp_path: Path) -> None:
        store = FileBlobStore(tmp_path / "registry.json")

        store.save(b"first")
        store.save(b"second")

        assert store.load() == b"second"


class TestPostgresBlobStore:
    @patch("lossreport.registry.storage.postgres_store.get_connection")
    def test_load_returns_payload(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = (memoryview(b"[]"),)

        result = PostgresBlobStore("imported_files").load()

        assert result == b"[]"
        assert mock_cursor.execute.call_args.args[1] == ("imported_files",)

    @patch("lossreport.registry.storage.postgres_store.get_connection")
    def test_load_returns_none_when_missing(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        assert PostgresBlobStore("imported_files").load() is None

    @patch("lossreport.registry.storage.postgres_store.get_connection")
    def test_save_upserts_and_commits(self, mock_get_conn: MagicMock) -> None:
        mock_conn, _cursor = _mock_connection(mock_get_conn)

        PostgresBlobStore("imported_files").save(b"[]")

        sql, params = mock_conn.execute.call_args.args
        assert "ON CONFLICT" in sql
        assert params == ("imported_files", b"[]")
        mock_conn.commit.assert_called_once()


class TestBlobStoreFactory:
    def test_creates_file_store(self) -> None:
        settings = MagicMock(storage_backend="file", registry_path="data/r.json")

        store = BlobStoreFactory.create(settings)

        assert isinstance(store, FileBlobStore)
        assert store.path == Path("data/r.json")

    def test_creates_memory_store(self) -> None:
        settings = MagicMock(storage_backend="Memory")

        assert isinstance(BlobStoreFactory.create(settings), MemoryBlobStore)

    def test_creates_postgres_store(self) -> None:
        settings = MagicMock(storage_backend="postgres", registry_key="k")

        assert isinstance(BlobStoreFactory.create(settings), PostgresBlobStore)

    def test_raises_for_unknown_backend(self) -> None:
        settings = MagicMock(storage_backend="s3")

        with pytest.raises(ValueError, match="Unknown storage backend"):
            BlobStoreFactory.create(settings)
