"""Odoo Connector Package.

XML-RPC client for CRUD and search operations on Odoo models.
"""

from connectors.odoo.odoo_client import (
    OdooClient,
    OdooError,
    OdooErrorKind,
    OdooAuthenticationError,
    OdooModelNotFoundError,
    OdooRemoteCallError,
    classify_fault,
)
from connectors.odoo.odoo_models import OdooConnectionConfig, OdooFault
from connectors.odoo.odoo_operations import OdooOperation
from connectors.odoo.odoo_transport import OdooTransportPool

__all__ = [
    # Client
    "OdooClient",
    "OdooTransportPool",
    "OdooOperation",
    # Errors
    "OdooError",
    "OdooErrorKind",
    "OdooAuthenticationError",
    "OdooModelNotFoundError",
    "OdooRemoteCallError",
    "classify_fault",
    # Models
    "OdooConnectionConfig",
    "OdooFault",
]
