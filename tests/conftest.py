# ================================
# FILE: tests/conftest.py
# ================================

import pytest
from fastapi.testclient import TestClient
from upload_store.main import app
from upload_store.api.dependencies import get_dir_manager
from upload_store.core.config import settings
from upload_store.services.dir_manager import DirManager

@pytest.fixture
def dir_manager(tmp_path):
    """Directory context rooted in a fresh temp directory"""
    manager = DirManager(root=str(tmp_path / "storage"), public_path="/files")
    manager.ensure()
    return manager

@pytest.fixture
def client(dir_manager, tmp_path, monkeypatch):
    """Test client storing uploads under the temp directory"""
    monkeypatch.setattr(settings, "upload_tmp_dir", str(tmp_path / "incoming"))
    app.dependency_overrides[get_dir_manager] = lambda: dir_manager
    yield TestClient(app)
    app.dependency_overrides.clear()

@pytest.fixture
def source_file(tmp_path):
    """Regular file with known content"""
    path = tmp_path / "up123"
    path.write_bytes(b"uploaded content\x00\xff")
    return path
