"""Odoo connector data models.

Connection settings and the shape of fault payloads returned by the Odoo
XML-RPC API.
"""

import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator


# Environment variables read by OdooConnectionConfig.from_env
ENV_SERVER_URI = "ODOO_URL"
ENV_USERNAME = "ODOO_USERNAME"
ENV_PASSWORD = "ODOO_PASSWORD"
ENV_DATABASE = "ODOO_DB"


class OdooConnectionConfig(BaseModel):
    """Credentials and location of an Odoo server.

    Attributes:
        server_uri: Base URL of the Odoo server (e.g. "https://erp.example.com")
        username: Login of the Odoo user
        password: Password or API key of the Odoo user
        database: Odoo database name
    """
    model_config = ConfigDict(frozen=True)

    server_uri: str = Field(..., min_length=1, description="Odoo base URL")
    username: str = Field(..., min_length=1, description="Odoo login")
    password: str = Field(..., min_length=1, description="Password or API key", repr=False)
    database: str = Field(..., min_length=1, description="Odoo database name")

    @field_validator("server_uri")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        stripped = value.rstrip("/")
        if not stripped:
            raise ValueError("server_uri must not be empty")
        return stripped

    def endpoint_url(self, endpoint: str) -> str:
        """Get the XML-RPC URL for an endpoint ("common" or "object")."""
        return f"{self.server_uri}/xmlrpc/2/{endpoint}"

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "OdooConnectionConfig":
        """Build a config from environment variables.

        Reads ODOO_URL, ODOO_USERNAME, ODOO_PASSWORD and ODOO_DB. If
        ``env_file`` exists it is loaded first (without overriding variables
        already set in the environment).

        Raises:
            ValueError: If a required environment variable is missing
        """
        if env_file is not None and Path(env_file).exists():
            load_dotenv(env_file)

        values = {}
        for field_name, var in (
            ("server_uri", ENV_SERVER_URI),
            ("username", ENV_USERNAME),
            ("password", ENV_PASSWORD),
            ("database", ENV_DATABASE),
        ):
            value = os.getenv(var)
            if not value:
                raise ValueError(f"{var} environment variable not set")
            values[field_name] = value

        return cls(**values)


class OdooFault(BaseModel):
    """A fault encoded in an otherwise successful XML-RPC response."""

    class Config:
        populate_by_name = True

    fault_code: Any = Field(..., alias="faultCode")
    fault_string: str = Field("", alias="faultString")

    @field_validator("fault_string", mode="before")
    @classmethod
    def coerce_fault_string(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @classmethod
    def from_result(cls, result: Any) -> Optional["OdooFault"]:
        """Return the fault encoded in ``result``, or None for a regular result."""
        if isinstance(result, dict) and "faultCode" in result:
            return cls.model_validate(result)
        return None

    @property
    def code(self) -> Optional[int]:
        """Fault code as an int when the server sent a numeric one."""
        if isinstance(self.fault_code, bool):
            return None
        if isinstance(self.fault_code, int):
            return self.fault_code
        if isinstance(self.fault_code, str) and self.fault_code.lstrip("-").isdigit():
            return int(self.fault_code)
        return None
