"""Document store backend configuration."""

from typing import Literal

from pydantic import BaseModel, Field

DocumentBackendType = Literal["inmemory", "postgres"]


class StorageConfig(BaseModel):
    """Configuration for the document store backend."""

    backend: DocumentBackendType = Field(
        default="inmemory",
        description="Backend type",
    )
    connection_url: str | None = Field(
        default=None,
        description="Connection URL (falls back to CLIENTELE_DATABASE_URL)",
    )
    table_name: str = Field(
        default="documents",
        pattern=r"^[a-z_][a-z0-9_]*$",
        description="Documents table name",
    )
    min_pool_size: int = Field(
        default=5,
        gt=0,
        description="Minimum connections to keep open",
    )
    max_pool_size: int = Field(
        default=20,
        gt=0,
        description="Maximum connections in pool",
    )
    command_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Default timeout for queries (seconds)",
    )
    ensure_schema: bool = Field(
        default=True,
        description="Create the documents table on startup",
    )
