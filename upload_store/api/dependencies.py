# ================================
# FILE: upload_store/api/dependencies.py
# ================================

from upload_store.services.dir_manager import DirManager

# One directory context shared by every request
_dir_manager = DirManager()

def get_dir_manager() -> DirManager:
    return _dir_manager
