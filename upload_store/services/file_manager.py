# ================================
# FILE: upload_store/services/file_manager.py
# ================================

import os
import posixpath
import logging
from typing import Any, Callable, Dict, Optional, Type

from upload_store.interfaces.dir_manager_interface import IDirManager
from upload_store.interfaces.file_manager_interface import IFileManager
from upload_store.interfaces.media_converter_interface import IMediaConverter
from upload_store.core.exceptions import (
    CleanupWarning,
    FilenameNotAssignedError,
    InvalidInputError,
)
from upload_store.services.file_mover import move_file
from upload_store.services.media_converters import PassthroughConverter
from upload_store.services.naming import build_filename, time_salt

logger = logging.getLogger(__name__)


class FileBaseManager(IFileManager):
    """
    Naming, path and move behaviour shared by every file manager.

    A manager is created per upload and must be given a filename with
    set_filename() before any path is requested or convert() is called.
    Once convert() has stored the file the filename can no longer change.
    """

    def __init__(
        self,
        dir_manager: IDirManager,
        version: str,
        salt_source: Optional[Callable[[], str]] = None,
    ):
        self.dir_manager = dir_manager
        self.version = version
        self.filename: Optional[str] = None
        self.salt_source = salt_source or time_salt
        self._committed = False

    def set_filename(self, extension: str) -> None:
        if self._committed:
            raise InvalidInputError(
                f"File {self.filename} is already stored; its name cannot change",
                details={"filename": self.filename},
            )
        self.filename = build_filename(self.version, self.salt_source(), extension)

    def _require_filename(self) -> str:
        if not self.filename:
            raise FilenameNotAssignedError(details={"version": self.version})
        return self.filename

    def filepath(self) -> str:
        return os.path.join(self.dir_manager.abs(), self._require_filename())

    def url(self) -> str:
        return posixpath.join(self.dir_manager.path(), self._require_filename())

    def convert(self, source_path: str, destination_hint: Optional[str] = None) -> None:
        destination = self.filepath()
        try:
            self._convert(source_path, destination, destination_hint)
        except CleanupWarning:
            self._committed = True
            raise
        self._committed = True
        logger.info("Stored %s as %s", source_path, self.filename)

    def _convert(self, source_path: str, destination_path: str, destination_hint: Optional[str]) -> None:
        move_file(source_path, destination_path)

    def describe(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "filename": self.filename,
            "url": self.url() if self.filename else None,
        }


class DefaultFileManager(FileBaseManager):
    """Stores any media type byte for byte"""


class ImageFileManager(FileBaseManager):
    """Stores images through a pluggable converter"""

    def __init__(
        self,
        dir_manager: IDirManager,
        version: str,
        salt_source: Optional[Callable[[], str]] = None,
        converter: Optional[IMediaConverter] = None,
    ):
        super().__init__(dir_manager, version, salt_source)
        self.converter = converter or PassthroughConverter()

    def _convert(self, source_path: str, destination_path: str, destination_hint: Optional[str]) -> None:
        self.converter.convert(source_path, destination_path, destination_hint)


FILE_MANAGERS: Dict[str, Type[FileBaseManager]] = {
    "image": ImageFileManager,
}


def register_file_manager(mime_base: str, manager_cls: Type[FileBaseManager]) -> None:
    """Use manager_cls for uploads of the given media family"""
    FILE_MANAGERS[mime_base.lower()] = manager_cls


def mime_base_of(content_type: Optional[str]) -> str:
    """'image/png; q=1' -> 'image'; anything without a slash -> ''"""
    if not content_type or "/" not in content_type:
        return ""
    return content_type.split("/", 1)[0].strip().lower()


def create_file_manager(
    dir_manager: IDirManager,
    mime_base: Optional[str],
    version: str,
    **kwargs: Any,
) -> FileBaseManager:
    """Return the file manager for a media family, falling back to DefaultFileManager"""
    manager_cls = FILE_MANAGERS.get((mime_base or "").lower(), DefaultFileManager)
    logger.debug("Using %s for media family %r", manager_cls.__name__, mime_base)
    return manager_cls(dir_manager, version, **kwargs)
