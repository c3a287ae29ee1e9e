"""
@PURPOSE: Test artifact storage - upload screenshots, traces and videos to Azure Blob Storage
@OUTLINE:
  - class BlobMetadata: size / last_modified / content_type of one blob
  - class StorageService(Protocol): storage operations used by the test run
  - class AzureBlobStorageService: azure-storage-blob implementation
  - def upload_test_artifacts(): push the whole results directory into a per-run container
@GOTCHAS:
  - Without a connection string the client stays None; every operation except
    file_exists() raises StorageNotConfiguredError, file_exists() returns False
  - Container names are {screenshot_container}-{run_id}; Azure only accepts lowercase names
  - Artifact blobs keep their path relative to the results directory
@DEPENDENCIES:
  - External: azure-storage-blob, loguru
  - Internal: config.settings, src.core.errors
@RELATED: cli/commands/artifacts.py, tests/e2e/conftest.py
"""

import mimetypes
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional, Protocol

from azure.storage.blob import BlobSasPermissions, BlobServiceClient, ContentSettings, generate_blob_sas
from loguru import logger

from config.settings import ConfigurationManager, get_configuration_manager
from src.core.errors import StorageError, StorageNotConfiguredError

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class BlobMetadata:
    size: int
    last_modified: Optional[datetime]
    content_type: str


class StorageService(Protocol):
    def upload_file(self, file_path: str, container_name: Optional[str] = None,
                    blob_name: Optional[str] = None) -> str: ...

    def download_file(self, file_name: str, container_name: Optional[str] = None) -> bytes: ...

    def delete_file(self, file_name: str, container_name: Optional[str] = None) -> None: ...

    def list_files(self, container_name: Optional[str] = None) -> List[str]: ...

    def generate_sas_uri(self, file_name: str, expiry_hours: Optional[int] = None,
                         container_name: Optional[str] = None) -> str: ...

    def file_exists(self, file_name: str, container_name: Optional[str] = None) -> bool: ...

    def get_file_metadata(self, file_name: str, container_name: Optional[str] = None) -> BlobMetadata: ...


class AzureBlobStorageService:
    """Azure Blob Storage backed artifact store.

    Args:
        config_manager: Source of the connection string and container settings
        client: Pre-built BlobServiceClient, skips connection-string parsing

    Examples:
        >>> storage = AzureBlobStorageService()
        >>> storage.upload_test_artifacts("nightly-42")
        ['screenshots/failed-login.png', ...]
    """

    def __init__(
        self,
        config_manager: Optional[ConfigurationManager] = None,
        client: Optional[BlobServiceClient] = None,
    ):
        self.config_manager = config_manager or get_configuration_manager()
        settings = self.config_manager.get_settings()
        self.azure_config = settings.azure_blob_storage
        self.default_container = settings.test_settings.screenshot_container
        self.results_dir = settings.get_results_path()
        self.client = client if client is not None else self._create_client()

    def _create_client(self) -> Optional[BlobServiceClient]:
        connection_string = self.azure_config.connection_string
        if not connection_string:
            logger.warning("Azure Blob Storage connection string not configured, storage is unavailable")
            return None

        client = BlobServiceClient.from_connection_string(connection_string)
        logger.info("Azure Blob Storage client initialized")
        return client

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    def _require_client(self, operation: str) -> BlobServiceClient:
        if self.client is None:
            raise StorageNotConfiguredError(operation)
        return self.client

    def _blob_client(self, operation: str, file_name: str, container_name: Optional[str]):
        client = self._require_client(operation)
        return client.get_blob_client(container=container_name or self.default_container, blob=file_name)

    # ========== Files ==========

    def upload_file(self, file_path: str, container_name: Optional[str] = None,
                    blob_name: Optional[str] = None) -> str:
        """Upload a local file, overwriting any blob with the same name.

        Returns:
            Blob name

        Raises:
            StorageNotConfiguredError: No connection string
            FileNotFoundError: file_path does not exist
        """
        client = self._require_client("upload file")
        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {file_path}")

        name = blob_name or path.name
        content_type = mimetypes.guess_type(path.name)[0] or DEFAULT_CONTENT_TYPE
        blob_client = client.get_blob_client(container=container_name or self.default_container, blob=name)

        with path.open("rb") as data:
            blob_client.upload_blob(data, overwrite=True, content_settings=ContentSettings(content_type=content_type))

        logger.debug(f"Uploaded {path} -> {name}")
        return name

    def download_file(self, file_name: str, container_name: Optional[str] = None) -> bytes:
        blob_client = self._blob_client("download file", file_name, container_name)
        data = blob_client.download_blob().readall()
        logger.debug(f"Downloaded {file_name} ({len(data)} bytes)")
        return data

    def delete_file(self, file_name: str, container_name: Optional[str] = None) -> None:
        self._blob_client("delete file", file_name, container_name).delete_blob()
        logger.info(f"Deleted blob: {file_name}")

    def list_files(self, container_name: Optional[str] = None) -> List[str]:
        client = self._require_client("list files")
        container_client = client.get_container_client(container_name or self.default_container)
        files = [blob.name for blob in container_client.list_blobs()]
        logger.debug(f"Listed {len(files)} blobs")
        return files

    def file_exists(self, file_name: str, container_name: Optional[str] = None) -> bool:
        if self.client is None:
            return False
        return self._blob_client("check file", file_name, container_name).exists()

    def get_file_metadata(self, file_name: str, container_name: Optional[str] = None) -> BlobMetadata:
        properties = self._blob_client("read metadata", file_name, container_name).get_blob_properties()
        content_settings = properties.content_settings
        return BlobMetadata(
            size=properties.size or 0,
            last_modified=properties.last_modified,
            content_type=(content_settings.content_type if content_settings else None) or DEFAULT_CONTENT_TYPE,
        )

    def generate_sas_uri(self, file_name: str, expiry_hours: Optional[int] = None,
                         container_name: Optional[str] = None) -> str:
        """Read-only SAS URL for a blob.

        Args:
            expiry_hours: Lifetime, defaults to azure_blob_storage.sas_expiry_hours

        Raises:
            StorageNotConfiguredError: No connection string
            StorageError: SAS generation disabled or no account key available
        """
        client = self._require_client("generate SAS URI")
        if not self.azure_config.should_generate_sas_uri:
            raise StorageError("SAS URI generation is disabled in configuration")

        account_key = getattr(client.credential, "account_key", None)
        if not account_key:
            raise StorageError("Connection string has no account key, cannot sign SAS URI")

        container = container_name or self.default_container
        hours = expiry_hours or self.azure_config.sas_expiry_hours
        token = generate_blob_sas(
            account_name=client.account_name,
            container_name=container,
            blob_name=file_name,
            account_key=account_key,
            permission=BlobSasPermissions(read=True),
            expiry=datetime.now(timezone.utc) + timedelta(hours=hours),
        )
        blob_url = client.get_blob_client(container=container, blob=file_name).url
        logger.debug(f"SAS URI generated for {file_name} ({hours}h)")
        return f"{blob_url}?{token}"

    # ========== Test run ==========

    def upload_test_artifacts(self, run_id: Optional[str] = None) -> List[str]:
        """Upload everything under the results directory into a per-run container.

        Args:
            run_id: Container suffix, defaults to test-run-<epoch ms>

        Returns:
            Uploaded blob names, empty when there are no results
        """
        client = self._require_client("upload test artifacts")
        if not self.results_dir.is_dir():
            logger.info(f"No test artifacts found in {self.results_dir}")
            return []

        run_id = run_id or f"test-run-{int(time.time() * 1000)}"
        container_name = f"{self.default_container}-{run_id}".lower()

        container_client = client.get_container_client(container_name)
        if not container_client.exists():
            container_client.create_container()
            logger.info(f"Created container: {container_name}")

        uploaded = []
        for path in sorted(self.results_dir.rglob("*")):
            if path.is_file():
                uploaded.append(
                    self.upload_file(str(path), container_name, blob_name=path.relative_to(self.results_dir).as_posix())
                )

        logger.success(f"✓ Uploaded {len(uploaded)} artifacts to container: {container_name}")
        return uploaded
