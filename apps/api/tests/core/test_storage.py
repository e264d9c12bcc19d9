"""
Tests for local document storage.
"""

from unittest.mock import patch

import pytest

from jobportal.core.storage import LocalStorage, StorageError


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path, "/uploads/")


class TestLocalStorage:
    @pytest.mark.asyncio
    async def test_store_writes_file_and_returns_locator(self, storage, tmp_path):
        url = await storage.store("abc/cv-abc.pdf", b"%PDF-1.4")

        assert url == "/uploads/abc/cv-abc.pdf"
        assert (tmp_path / "abc" / "cv-abc.pdf").read_bytes() == b"%PDF-1.4"

    @pytest.mark.asyncio
    async def test_store_overwrites(self, storage, tmp_path):
        await storage.store("abc/cv-abc.pdf", b"first")
        await storage.store("abc/cv-abc.pdf", b"second")

        assert (tmp_path / "abc" / "cv-abc.pdf").read_bytes() == b"second"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("ref", ["../escape.pdf", "/etc/passwd", "abc/../../x"])
    async def test_rejects_paths_outside_root(self, storage, ref):
        with pytest.raises(ValueError):
            await storage.store(ref, b"data")

    @pytest.mark.asyncio
    async def test_write_failure_raises_storage_error(self, storage):
        with patch.object(LocalStorage, "_write", side_effect=PermissionError("read-only")):
            with pytest.raises(StorageError):
                await storage.store("abc/cv-abc.pdf", b"data")

    @pytest.mark.asyncio
    async def test_ensure_applicant_folders(self, storage, tmp_path):
        await storage.ensure_applicant_folders("abc")
        await storage.ensure_applicant_folders("abc")

        assert (tmp_path / "abc" / "qualifications").is_dir()
        assert (tmp_path / "abc" / "experiences").is_dir()
