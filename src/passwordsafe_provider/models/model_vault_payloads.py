# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Response payload models for the Password Safe REST API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

SECRET_TYPE_FILE: str = "File"


class ModelSecretPayload(BaseModel):
    """One Secrets Safe entry as returned by ``GET /secrets-safe/secrets``."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str = Field(default="", alias="Id")
    title: str = Field(default="", alias="Title")
    password: str = Field(default="", alias="Password")
    secret_type: str = Field(default="Credential", alias="SecretType")
    folder_path: str = Field(default="", alias="FolderPath")

    @property
    def is_file(self) -> bool:
        return self.secret_type.lower() == SECRET_TYPE_FILE.lower()


class ModelManagedAccount(BaseModel):
    """Managed account lookup result from ``GET /ManagedAccounts``."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    system_id: int = Field(alias="SystemId")
    account_id: int = Field(alias="AccountId")
    system_name: str = Field(default="", alias="SystemName")
    account_name: str = Field(default="", alias="AccountName")


__all__: list[str] = [
    "SECRET_TYPE_FILE",
    "ModelManagedAccount",
    "ModelSecretPayload",
]
