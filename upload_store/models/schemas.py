# ================================
# FILE: upload_store/models/schemas.py
# ================================

from pydantic import BaseModel, Field
from typing import Optional, List

class UploadResponse(BaseModel):
    """Response model for a stored upload"""
    
    success: bool
    version: str = Field(..., description="Version tag the file was stored under")
    filename: str = Field(..., description="Generated on-disk filename")
    url: str = Field(..., description="Public path of the stored file")
    content_type: Optional[str] = None
    size: int = Field(..., ge=0, description="Stored size in bytes")
    warnings: List[str] = Field(default_factory=list)
    message: str

class HealthResponse(BaseModel):
    """Health check response model"""
    
    status: str
    version: str
    storage_root: str
    storage_writable: bool
