"""Odoo remote operation names.

Names of the ORM methods the client invokes through ``execute_kw``, plus the
two XML-RPC endpoints it talks to.
"""

from enum import Enum


class OdooOperation(str, Enum):
    """CRUD operations on an Odoo model."""
    READ = "read"
    WRITE = "write"
    CREATE = "create"
    UNLINK = "unlink"

    # Internal use only: backs OdooClient.search
    SEARCH_READ = "search_read"


CHECK_ACCESS_RIGHTS = "check_access_rights"
FIELDS_GET = "fields_get"

# Attributes requested from fields_get
FIELD_ATTRIBUTES = ["string", "help", "type"]

COMMON_ENDPOINT = "common"   # authentication
OBJECT_ENDPOINT = "object"   # model operations
