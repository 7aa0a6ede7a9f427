# ================================
# FILE: upload_store/services/media_converters.py
# ================================

import logging
from typing import Optional

from upload_store.interfaces.media_converter_interface import IMediaConverter
from upload_store.services.file_mover import move_file

logger = logging.getLogger(__name__)


class PassthroughConverter(IMediaConverter):
    """Stores the source unchanged"""

    def __init__(self, chunk_size: Optional[int] = None):
        self.chunk_size = chunk_size

    def convert(self, source_path: str, destination_path: str, destination_hint: Optional[str] = None) -> None:
        logger.debug("Passthrough conversion %s -> %s", source_path, destination_path)
        move_file(source_path, destination_path, self.chunk_size)
