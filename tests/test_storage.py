"""Unit tests for soundshare.services.storage: kind routing, filename rewrite, local and S3 backends."""

import asyncio
import os
import re
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from botocore.exceptions import ClientError
from pydantic import SecretStr

from soundshare.core.config import Settings
from soundshare.core.errors import StorageError
from soundshare.services.storage import (
    UPLOAD_TARGETS,
    LocalStorageBackend,
    S3StorageBackend,
    UploadKind,
    build_storage,
    generate_filename,
)

GENERATED_NAME = re.compile(r"^\d{13}-\d+(\.[a-z0-9]+)?$")


class TestUploadTargets(unittest.TestCase):
    def test_every_kind_has_a_target(self) -> None:
        self.assertEqual(set(UPLOAD_TARGETS), set(UploadKind))

    def test_song_and_cover_routing(self) -> None:
        song = UPLOAD_TARGETS[UploadKind.SONG]
        cover = UPLOAD_TARGETS[UploadKind.COVER]
        self.assertEqual((song.directory, song.folder, song.resource_type), ("uploads", "songs", "video"))
        self.assertEqual((cover.directory, cover.folder, cover.resource_type), ("covers", "covers", "image"))


class TestGenerateFilename(unittest.TestCase):
    def test_keeps_only_extension(self) -> None:
        name = generate_filename("../../etc/My Song.MP3")
        self.assertRegex(name, GENERATED_NAME)
        self.assertTrue(name.endswith(".mp3"))
        self.assertNotIn("Song", name)

    def test_no_extension(self) -> None:
        self.assertRegex(generate_filename("track"), GENERATED_NAME)
        self.assertRegex(generate_filename(None), GENERATED_NAME)


class TestLocalStorageBackend(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.backend = LocalStorageBackend(self.tmp.name)

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_song_written_under_uploads(self) -> None:
        stored = asyncio.run(self.backend.save(UploadKind.SONG, "a.mp3", b"audio"))
        self.assertTrue(stored.url.startswith("/uploads/"))
        self.assertTrue(stored.url.endswith(".mp3"))
        path = Path(stored.locator)
        self.assertEqual(path.parent, Path(self.tmp.name) / "uploads")
        self.assertEqual(path.read_bytes(), b"audio")

    def test_cover_written_under_covers(self) -> None:
        stored = asyncio.run(self.backend.save(UploadKind.COVER, "c.png", b"img"))
        self.assertTrue(stored.url.startswith("/covers/"))
        self.assertEqual(Path(stored.locator).parent.name, "covers")

    def test_ensure_directories_creates_all_kinds(self) -> None:
        self.backend.ensure_directories()
        for kind in UploadKind:
            self.assertTrue(self.backend.directory_for(kind).is_dir())
        self.backend.ensure_directories()

    def test_directory_created_on_first_use(self) -> None:
        self.assertFalse((Path(self.tmp.name) / "covers").exists())
        asyncio.run(self.backend.save(UploadKind.COVER, "c.jpg", b"img"))
        self.assertTrue((Path(self.tmp.name) / "covers").is_dir())

    def test_delete_removes_file_and_tolerates_missing(self) -> None:
        stored = asyncio.run(self.backend.save(UploadKind.SONG, "a.mp3", b"audio"))
        asyncio.run(self.backend.delete(stored.locator))
        self.assertFalse(os.path.exists(stored.locator))
        asyncio.run(self.backend.delete(stored.locator))

    def test_write_failure_is_storage_error(self) -> None:
        # A regular file where the directory should be makes makedirs fail.
        (Path(self.tmp.name) / "uploads").write_bytes(b"")
        with self.assertRaises(StorageError):
            asyncio.run(self.backend.save(UploadKind.SONG, "a.mp3", b"audio"))


class TestS3StorageBackend(unittest.TestCase):
    def setUp(self) -> None:
        self.client = MagicMock()
        self.backend = S3StorageBackend(
            self.client, bucket="media", public_base_url="https://cdn.example.com/"
        )

    def test_song_goes_to_songs_folder_as_video(self) -> None:
        stored = asyncio.run(
            self.backend.save(UploadKind.SONG, "a.mp3", b"audio", "audio/mpeg")
        )
        kwargs = self.client.put_object.call_args.kwargs
        self.assertEqual(kwargs["Bucket"], "media")
        self.assertTrue(kwargs["Key"].startswith("songs/"))
        self.assertTrue(kwargs["Key"].endswith(".mp3"))
        self.assertEqual(kwargs["Body"], b"audio")
        self.assertEqual(kwargs["ContentType"], "audio/mpeg")
        self.assertEqual(kwargs["Metadata"], {"resource-type": "video"})
        self.assertEqual(stored.url, f"https://cdn.example.com/{kwargs['Key']}")
        self.assertEqual(stored.locator, kwargs["Key"])

    def test_cover_goes_to_covers_folder_as_image(self) -> None:
        asyncio.run(self.backend.save(UploadKind.COVER, "c.png", b"img"))
        kwargs = self.client.put_object.call_args.kwargs
        self.assertTrue(kwargs["Key"].startswith("covers/"))
        self.assertEqual(kwargs["ContentType"], "application/octet-stream")
        self.assertEqual(kwargs["Metadata"], {"resource-type": "image"})

    def test_client_error_is_storage_error(self) -> None:
        self.client.put_object.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject"
        )
        with self.assertRaises(StorageError) as ctx:
            asyncio.run(self.backend.save(UploadKind.SONG, "a.mp3", b"audio"))
        self.assertNotIn("denied", ctx.exception.message)

    def test_delete(self) -> None:
        asyncio.run(self.backend.delete("songs/x.mp3"))
        self.client.delete_object.assert_called_once_with(Bucket="media", Key="songs/x.mp3")


class TestBuildStorage(unittest.TestCase):
    def test_local_by_default(self) -> None:
        backend = build_storage(Settings(_env_file=None, UPLOAD_ROOT="/srv/media"))
        self.assertIsInstance(backend, LocalStorageBackend)
        self.assertEqual(backend.root, Path("/srv/media"))

    def test_s3_backend_and_default_public_url(self) -> None:
        settings = Settings(
            _env_file=None,
            STORAGE_BACKEND="s3",
            S3_BUCKET="media",
            S3_REGION="eu-west-1",
            S3_ACCESS_KEY_ID="key",
            S3_SECRET_ACCESS_KEY=SecretStr("secret"),
        )
        with patch("soundshare.services.storage.boto3.client") as client_factory:
            backend = build_storage(settings)
        self.assertIsInstance(backend, S3StorageBackend)
        self.assertEqual(backend.public_base_url, "https://media.s3.eu-west-1.amazonaws.com")
        client_factory.assert_called_once_with(
            "s3",
            endpoint_url=None,
            region_name="eu-west-1",
            aws_access_key_id="key",
            aws_secret_access_key="secret",
        )

    def test_s3_public_base_url_override(self) -> None:
        settings = Settings(
            _env_file=None,
            STORAGE_BACKEND="s3",
            S3_BUCKET="media",
            S3_PUBLIC_BASE_URL="https://cdn.example.com/",
        )
        with patch("soundshare.services.storage.boto3.client"):
            backend = build_storage(settings)
        self.assertEqual(backend.public_base_url, "https://cdn.example.com")


if __name__ == "__main__":
    unittest.main()
