"""
@PURPOSE: External services used by the test run
@OUTLINE:
  - AzureBlobStorageService / StorageService / BlobMetadata: artifact storage
"""

from .storage_service import AzureBlobStorageService, BlobMetadata, StorageService

__all__ = ["AzureBlobStorageService", "BlobMetadata", "StorageService"]
