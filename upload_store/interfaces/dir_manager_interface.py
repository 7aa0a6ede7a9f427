# ================================
# FILE: upload_store/interfaces/dir_manager_interface.py
# ================================

from abc import ABC, abstractmethod

class IDirManager(ABC):
    """Interface for the directory context a file manager stores into"""
    
    @abstractmethod
    def abs(self) -> str:
        """Absolute filesystem root for stored files"""
        pass
    
    @abstractmethod
    def path(self) -> str:
        """Public URL prefix under which stored files are served"""
        pass
