#================================
# FILE: tests/test_services.py
# ================================

import os
import re
import pytest
from datetime import datetime
from upload_store.core.exceptions import (
    CleanupWarning,
    FilenameNotAssignedError,
    InvalidInputError,
    NotFoundError,
    StorageIOError,
)
from upload_store.interfaces.media_converter_interface import IMediaConverter
from upload_store.services import file_manager as file_manager_module
from upload_store.services import file_mover
from upload_store.services.dir_manager import DirManager
from upload_store.services.file_manager import (
    DefaultFileManager,
    FileBaseManager,
    ImageFileManager,
    create_file_manager,
    mime_base_of,
    register_file_manager,
)
from upload_store.services.naming import (
    build_filename,
    seconds_since_midnight,
    time_salt,
    to_base36,
)

class TestNaming:
    """Filename salt and layout"""

    def test_base36_digits(self):
        assert to_base36(0) == "0"
        assert to_base36(35) == "z"
        assert to_base36(36) == "10"
        assert int(to_base36(86399), 36) == 86399

    def test_base36_rejects_negative(self):
        with pytest.raises(ValueError):
            to_base36(-1)

    def test_seconds_since_midnight_bounds(self):
        assert seconds_since_midnight(datetime(2024, 5, 1, 0, 0, 0)) == 0
        assert seconds_since_midnight(datetime(2024, 5, 1, 23, 59, 59)) == 86399
        assert seconds_since_midnight(datetime(2024, 5, 1, 1, 2, 3)) == 3723

    def test_time_salt_is_base36_of_clock(self):
        salt = time_salt(datetime(2024, 5, 1, 1, 2, 3))
        assert salt == to_base36(3723)

    def test_build_filename_keeps_extension_verbatim(self):
        assert build_filename("thumb", "abc", ".png") == "thumb-abc.png"
        assert build_filename("thumb", "abc", "") == "thumb-abc"

class TestFileManager:
    """Path binding, conversion and describe"""

    def test_set_filename_shape(self, dir_manager):
        manager = create_file_manager(dir_manager, "application", "orig")
        manager.set_filename(".bin")

        match = re.match(r"^orig-([0-9a-z]+)\.bin$", manager.filename)
        assert match is not None
        assert 0 <= int(match.group(1), 36) <= 86399

    def test_set_filename_does_not_touch_disk(self, dir_manager):
        manager = create_file_manager(dir_manager, "image", "thumb")
        manager.set_filename(".png")

        assert os.listdir(dir_manager.abs()) == []

    def test_injected_salt_source(self, dir_manager):
        manager = DefaultFileManager(dir_manager, "orig", salt_source=lambda: "tok")
        manager.set_filename(".txt")

        assert manager.filename == "orig-tok.txt"

    def test_paths_join_directory_context(self, dir_manager):
        manager = DefaultFileManager(dir_manager, "orig", salt_source=lambda: "k2")
        manager.set_filename(".bin")

        assert manager.filepath() == os.path.join(dir_manager.abs(), "orig-k2.bin")
        assert manager.url() == "/files/orig-k2.bin"

    def test_paths_follow_directory_changes(self, dir_manager, tmp_path):
        manager = DefaultFileManager(dir_manager, "orig", salt_source=lambda: "k2")
        manager.set_filename(".bin")

        dir_manager.root = str(tmp_path / "elsewhere")
        dir_manager.public_path = "media/"

        assert manager.filepath() == os.path.join(str(tmp_path / "elsewhere"), "orig-k2.bin")
        assert manager.url() == "/media/orig-k2.bin"

    def test_paths_require_filename(self, dir_manager):
        manager = create_file_manager(dir_manager, "image", "thumb")

        with pytest.raises(FilenameNotAssignedError):
            manager.filepath()
        with pytest.raises(FilenameNotAssignedError):
            manager.url()
        with pytest.raises(FilenameNotAssignedError):
            manager.convert("/nonexistent")

    def test_describe(self, dir_manager):
        manager = DefaultFileManager(dir_manager, "orig", salt_source=lambda: "k2")
        assert manager.describe() == {"version": "orig", "filename": None, "url": None}

        manager.set_filename(".bin")
        assert manager.describe() == {
            "version": "orig",
            "filename": "orig-k2.bin",
            "url": "/files/orig-k2.bin",
        }

    def test_convert_moves_file_into_place(self, dir_manager, tmp_path):
        src = tmp_path / "up123"
        payload = os.urandom(10 * 1024 * 1024)
        src.write_bytes(payload)

        manager = create_file_manager(dir_manager, "application", "orig")
        manager.set_filename(".bin")
        manager.convert(str(src), "ignored")

        stored = os.path.join(dir_manager.abs(), manager.filename)
        assert re.match(r"^orig-[0-9a-z]+\.bin$", manager.filename)
        with open(stored, "rb") as f:
            assert f.read() == payload
        assert not src.exists()

    def test_rename_allowed_before_convert(self, dir_manager):
        salts = iter(["a", "b"])
        manager = DefaultFileManager(dir_manager, "orig", salt_source=lambda: next(salts))
        manager.set_filename(".bin")
        manager.set_filename(".txt")

        assert manager.filename == "orig-b.txt"

    def test_rename_rejected_after_convert(self, dir_manager, source_file):
        manager = DefaultFileManager(dir_manager, "orig", salt_source=lambda: "k2")
        manager.set_filename(".bin")
        manager.convert(str(source_file))

        with pytest.raises(InvalidInputError):
            manager.set_filename(".txt")
        assert manager.filename == "orig-k2.bin"

    def test_rename_rejected_after_cleanup_warning(self, dir_manager, source_file, monkeypatch):
        def failing_remove(path):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(file_mover.os, "remove", failing_remove)
        manager = DefaultFileManager(dir_manager, "orig", salt_source=lambda: "k2")
        manager.set_filename(".bin")

        with pytest.raises(CleanupWarning):
            manager.convert(str(source_file))
        assert os.path.exists(manager.filepath())

        with pytest.raises(InvalidInputError):
            manager.set_filename(".txt")

    def test_rename_allowed_after_failed_convert(self, dir_manager, tmp_path):
        manager = DefaultFileManager(dir_manager, "orig", salt_source=lambda: "k2")
        manager.set_filename(".bin")

        with pytest.raises(NotFoundError):
            manager.convert(str(tmp_path / "missing"))

        manager.set_filename(".txt")
        assert manager.filename == "orig-k2.txt"

class RecordingConverter(IMediaConverter):
    """Writes a marker instead of the source bytes"""

    def __init__(self):
        self.calls = []

    def convert(self, source_path, destination_path, destination_hint=None):
        self.calls.append((source_path, destination_path, destination_hint))
        with open(destination_path, "wb") as f:
            f.write(b"converted")
        os.remove(source_path)

class TestFactory:
    """Manager selection by media family"""

    def test_image_family(self, dir_manager):
        manager = create_file_manager(dir_manager, "image", "v1")
        assert isinstance(manager, ImageFileManager)
        assert manager.version == "v1"

    @pytest.mark.parametrize("family", ["unknown-type", "video", "application", "", None])
    def test_unknown_family_falls_back_to_default(self, dir_manager, family):
        manager = create_file_manager(dir_manager, family, "v1")
        assert type(manager) is DefaultFileManager

    def test_family_is_case_insensitive(self, dir_manager):
        assert isinstance(create_file_manager(dir_manager, "IMAGE", "v1"), ImageFileManager)

    def test_register_new_family(self, dir_manager, monkeypatch):
        monkeypatch.setattr(
            file_manager_module, "FILE_MANAGERS", dict(file_manager_module.FILE_MANAGERS)
        )

        class VideoFileManager(FileBaseManager):
            pass

        register_file_manager("Video", VideoFileManager)

        assert isinstance(create_file_manager(dir_manager, "video", "v1"), VideoFileManager)
        assert isinstance(create_file_manager(dir_manager, "image", "v1"), ImageFileManager)

    def test_image_manager_default_converter_moves_bytes(self, dir_manager, source_file):
        manager = create_file_manager(dir_manager, "image", "thumb")
        manager.set_filename(".png")
        manager.convert(str(source_file))

        with open(manager.filepath(), "rb") as f:
            assert f.read() == b"uploaded content\x00\xff"
        assert not source_file.exists()

    def test_image_manager_uses_injected_converter(self, dir_manager, source_file):
        converter = RecordingConverter()
        manager = create_file_manager(
            dir_manager, "image", "thumb", converter=converter, salt_source=lambda: "x"
        )
        manager.set_filename(".webp")
        manager.convert(str(source_file), "webp")

        assert converter.calls == [(str(source_file), manager.filepath(), "webp")]
        with open(manager.filepath(), "rb") as f:
            assert f.read() == b"converted"

    @pytest.mark.parametrize("content_type, family", [
        ("image/png", "image"),
        ("Image/JPEG", "image"),
        ("application/octet-stream", "application"),
        ("text/plain; charset=utf-8", "text"),
        ("", ""),
        (None, ""),
        ("garbage", ""),
    ])
    def test_mime_base_of(self, content_type, family):
        assert mime_base_of(content_type) == family

class TestDirManager:

    def test_public_path_normalised(self, tmp_path):
        assert DirManager(str(tmp_path), "files/").path() == "/files"
        assert DirManager(str(tmp_path), "/").path() == "/"

    def test_abs_is_absolute(self):
        assert os.path.isabs(DirManager("relative/storage", "/files").abs())

    def test_ensure_creates_root(self, tmp_path):
        manager = DirManager(str(tmp_path / "a" / "b"), "/files")
        assert manager.ensure() == str(tmp_path / "a" / "b")
        assert (tmp_path / "a" / "b").is_dir()

    def test_ensure_under_regular_file_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_bytes(b"x")

        with pytest.raises(StorageIOError):
            DirManager(str(blocker / "storage"), "/files").ensure()
