import asyncio
import io
from unittest.mock import patch

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from gemini_relay.api.dependencies.uploads import _copy_to, staged_upload
from gemini_relay.exceptions import PayloadIOError, PayloadTooLarge


def make_upload(content: bytes, filename: str = "photo.png", content_type: str = "image/png") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


class TestStagedUpload:

    @pytest.mark.asyncio
    async def test_file_exists_inside_scope_only(self, tmp_path):
        """
        Test: Staging lifecycle
        How: Stage an upload and inspect the disk inside and after the block
        Ensures: The copy is complete while in scope and deleted afterwards
        """
        scratch = tmp_path / "uploads"

        async with staged_upload(make_upload(b"image-bytes"), scratch) as staged:
            assert staged.path.parent == scratch
            assert staged.path.read_bytes() == b"image-bytes"
            assert staged.filename == "photo.png"
            assert staged.content_type == "image/png"
            assert staged.size == len(b"image-bytes")

        assert not staged.path.exists()
        assert list(scratch.iterdir()) == []

    @pytest.mark.asyncio
    async def test_suffix_kept(self, tmp_path):
        async with staged_upload(make_upload(b"%PDF", "report.pdf", "application/pdf"), tmp_path) as staged:
            assert staged.path.suffix == ".pdf"
            assert staged.path.name != "report.pdf"

    @pytest.mark.asyncio
    async def test_deleted_when_body_raises(self, tmp_path):
        with pytest.raises(RuntimeError, match="model down"):
            async with staged_upload(make_upload(b"data"), tmp_path) as staged:
                raise RuntimeError("model down")

        assert not staged.path.exists()

    @pytest.mark.asyncio
    async def test_over_limit_is_rejected_and_removed(self, tmp_path):
        with pytest.raises(PayloadTooLarge):
            async with staged_upload(make_upload(b"x" * 100), tmp_path, max_bytes=10):
                pytest.fail("body must not run for oversized uploads")

        assert list(tmp_path.iterdir()) == []

    @pytest.mark.asyncio
    async def test_file_already_removed_is_fine(self, tmp_path):
        async with staged_upload(make_upload(b"data"), tmp_path) as staged:
            staged.path.unlink()

        assert list(tmp_path.iterdir()) == []

    @pytest.mark.asyncio
    async def test_concurrent_uploads_get_distinct_paths(self, tmp_path):
        async with staged_upload(make_upload(b"a"), tmp_path) as first:
            async with staged_upload(make_upload(b"b"), tmp_path) as second:
                assert first.path != second.path
                assert first.path.read_bytes() == b"a"
                assert second.path.read_bytes() == b"b"

    @pytest.mark.asyncio
    async def test_undeletable_file_raises(self, tmp_path):
        """
        Test: Cleanup failure
        How: Make Path.unlink fail with a permission error while leaving the scope
        Ensures: The failure surfaces as PayloadIOError instead of passing silently
        """
        with pytest.raises(PayloadIOError, match="Failed to delete uploaded file: Permission denied"):
            with patch("pathlib.Path.unlink", side_effect=PermissionError(13, "Permission denied")):
                async with staged_upload(make_upload(b"data"), tmp_path):
                    pass

    @pytest.mark.asyncio
    async def test_copy_runs_in_worker_thread(self, tmp_path):
        with patch(
            "gemini_relay.api.dependencies.uploads.asyncio.to_thread", wraps=asyncio.to_thread
        ) as to_thread:
            async with staged_upload(make_upload(b"data"), tmp_path) as staged:
                assert staged.path.read_bytes() == b"data"

        to_thread.assert_called_once()
        assert to_thread.call_args.args[0] is _copy_to

    @pytest.mark.asyncio
    async def test_copy_starts_from_beginning(self, tmp_path):
        upload = make_upload(b"full-content")
        await upload.read(4)

        async with staged_upload(upload, tmp_path) as staged:
            assert staged.path.read_bytes() == b"full-content"
            assert staged.size == len(b"full-content")
