"""Request, result and decision types for storage provisioning."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class StorageSku(str, Enum):
    """Replication strategy of a storage account."""

    STANDARD_LRS = "Standard_LRS"
    STANDARD_ZRS = "Standard_ZRS"
    STANDARD_GRS = "Standard_GRS"
    STANDARD_RAGRS = "Standard_RAGRS"
    PREMIUM_LRS = "Premium_LRS"
    PREMIUM_ZRS = "Premium_ZRS"
    STANDARD_GZRS = "Standard_GZRS"
    STANDARD_RAGZRS = "Standard_RAGZRS"


class StorageKind(str, Enum):
    """Capability profile of a storage account."""

    STORAGE = "Storage"
    STORAGE_V2 = "StorageV2"
    BLOB_STORAGE = "BlobStorage"
    BLOCK_BLOB_STORAGE = "BlockBlobStorage"
    FILE_STORAGE = "FileStorage"


class ResourceState(str, Enum):
    """Terminal state of a resource after its ensure step.

    A resource is queried first; if found it is reused, if absent it is
    created. A failed create raises instead of producing a state.
    """

    FOUND = "found"
    CREATED = "created"


class ProvisionStatus(str, Enum):
    CREATED = "created"
    VERIFIED = "verified"


class ProvisionRequest(BaseModel):
    """Invocation parameters of the provisioning routine."""

    subscription_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    resource_group_name: str = Field(min_length=1)
    location: str = Field(min_length=1)
    sku: StorageSku = StorageSku.STANDARD_LRS
    kind: StorageKind = StorageKind.STORAGE_V2
    tags: dict[str, str] = Field(default_factory=dict)


class ProvisionResult(BaseModel):
    account_name: str
    resource_group_name: str
    status: ProvisionStatus
    resource_group_state: ResourceState
    storage_account_state: ResourceState

    @property
    def message(self) -> str:
        if self.status == ProvisionStatus.CREATED:
            return (
                f"Created storage account '{self.account_name}' "
                f"in resource group '{self.resource_group_name}'"
            )
        return (
            f"Verified existing storage account '{self.account_name}' "
            f"in resource group '{self.resource_group_name}'"
        )


SpecT = TypeVar("SpecT")


@dataclass(frozen=True)
class Found:
    """An existing resource that is reused as-is."""

    resource: Any


@dataclass(frozen=True)
class ToCreate(Generic[SpecT]):
    """A resource that is absent and will be created from ``spec``."""

    spec: SpecT


@dataclass(frozen=True)
class ResourceGroupSpec:
    name: str
    location: str
    tags: dict[str, str]


@dataclass(frozen=True)
class StorageAccountSpec:
    resource_group_name: str
    account_name: str
    location: str
    sku: StorageSku
    kind: StorageKind
    tags: dict[str, str]
