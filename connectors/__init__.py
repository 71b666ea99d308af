"""ERP Connectors.

This package contains clients for specific ERP systems. Each connector lives
in its own subfolder and handles:
- ERP-specific authentication
- API communication
- Mapping remote faults to typed errors

Currently available:
- odoo/: Odoo over XML-RPC
"""

from connectors.odoo import (
    OdooClient,
    OdooConnectionConfig,
    OdooOperation,
    OdooError,
    OdooErrorKind,
    OdooAuthenticationError,
    OdooModelNotFoundError,
    OdooRemoteCallError,
)

__all__ = [
    "OdooClient",
    "OdooConnectionConfig",
    "OdooOperation",
    "OdooError",
    "OdooErrorKind",
    "OdooAuthenticationError",
    "OdooModelNotFoundError",
    "OdooRemoteCallError",
]
