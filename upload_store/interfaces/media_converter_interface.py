# ================================
# FILE: upload_store/interfaces/media_converter_interface.py
# ================================

from abc import ABC, abstractmethod
from typing import Optional

class IMediaConverter(ABC):
    """Interface for media-specific conversion used by typed file managers"""
    
    @abstractmethod
    def convert(self, source_path: str, destination_path: str, destination_hint: Optional[str] = None) -> None:
        """Write the converted source to destination_path and consume the source"""
        pass
