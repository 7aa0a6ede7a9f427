# ================================
# FILE: upload_store/services/dir_manager.py
# ================================

import os
import logging
from typing import Optional

from upload_store.interfaces.dir_manager_interface import IDirManager
from upload_store.core.config import settings
from upload_store.core.exceptions import ConfigurationError, StorageIOError

logger = logging.getLogger(__name__)


class DirManager(IDirManager):
    """Storage root and public prefix shared by all file managers"""

    def __init__(self, root: Optional[str] = None, public_path: Optional[str] = None):
        self.root = root if root is not None else settings.storage_root
        self.public_path = public_path if public_path is not None else settings.public_base_path
        if not self.root:
            raise ConfigurationError("Storage root must not be empty")

    def abs(self) -> str:
        return os.path.abspath(self.root)

    def path(self) -> str:
        return "/" + self.public_path.strip("/")

    def ensure(self) -> str:
        """Create the storage root if needed and return its absolute path"""
        root = self.abs()
        try:
            os.makedirs(root, exist_ok=True)
        except OSError as exc:
            raise StorageIOError(
                f"Cannot create storage root {root}: {exc.strerror or exc}",
                details={"path": root, "errno": exc.errno},
            ) from exc
        logger.debug("Storage root ready at %s", root)
        return root
