# ================================
# FILE: upload_store/interfaces/file_manager_interface.py
# ================================

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

class IFileManager(ABC):
    """Interface for per-upload file managers"""
    
    @abstractmethod
    def set_filename(self, extension: str) -> None:
        """Assign the stored filename from the version tag and a salt"""
        pass
    
    @abstractmethod
    def filepath(self) -> str:
        """Absolute filesystem path of the stored file"""
        pass
    
    @abstractmethod
    def url(self) -> str:
        """Public path of the stored file"""
        pass
    
    @abstractmethod
    def convert(self, source_path: str, destination_hint: Optional[str] = None) -> None:
        """Transform the source file and move the result into place"""
        pass
    
    @abstractmethod
    def describe(self) -> Dict[str, Any]:
        """Serializable summary for API responses"""
        pass
