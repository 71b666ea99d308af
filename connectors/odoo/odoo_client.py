"""Odoo XML-RPC Client.

Client for CRUD and search operations on Odoo models.
Handles authentication, dispatch through ``execute_kw`` and error mapping.
"""

import http.client
import xmlrpc.client
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union
from xml.parsers.expat import ExpatError

from connectors.odoo.odoo_models import OdooConnectionConfig, OdooFault
from connectors.odoo.odoo_operations import (
    CHECK_ACCESS_RIGHTS,
    FIELD_ATTRIBUTES,
    FIELDS_GET,
    OdooOperation,
)
from connectors.odoo.odoo_transport import OdooTransportPool, ProxyFactory
from core.observability.logging import get_logger, with_correlation

logger = get_logger(__name__)

# Substring of the server message raised when a referenced record is gone.
# Best-effort: Odoo only exposes this as translatable text, not a code.
RECORD_MISSING_MARKER = "Record does not exist"

DEFAULT_SEARCH_LIMIT = 1000

RecordIds = Union[int, str, Iterable[int]]

# Failures ServerProxy can raise besides xmlrpc.client.Fault
TRANSPORT_ERRORS = (xmlrpc.client.Error, http.client.HTTPException, ExpatError, OSError)


class OdooErrorKind(str, Enum):
    """Kinds of failure surfaced by OdooClient."""
    AUTHENTICATION = "AUTHENTICATION"
    MODEL_NOT_FOUND = "MODEL_NOT_FOUND"
    REMOTE_CALL = "REMOTE_CALL"


class OdooError(Exception):
    """Base exception for Odoo API errors."""
    kind = OdooErrorKind.REMOTE_CALL

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class OdooAuthenticationError(OdooError):
    """Credentials were rejected (authenticate returned no uid)."""
    kind = OdooErrorKind.AUTHENTICATION


class OdooModelNotFoundError(OdooError):
    """The targeted record does not exist or was deleted."""
    kind = OdooErrorKind.MODEL_NOT_FOUND


class OdooRemoteCallError(OdooError):
    """Any other fault raised by the server or the transport."""
    kind = OdooErrorKind.REMOTE_CALL


def classify_fault(message: str, code: Optional[int] = None) -> OdooError:
    """Map a fault message to the matching OdooError."""
    if RECORD_MISSING_MARKER in (message or ""):
        return OdooModelNotFoundError("Model not found (or) deleted", code)
    return OdooRemoteCallError(message, code)


def _is_single_id(ids: RecordIds) -> bool:
    return isinstance(ids, (int, str))


def _normalize_ids(ids: RecordIds) -> List[int]:
    """Turn a single id into a one-element list; any other iterable becomes a list.

    Raises:
        ValueError: A single id is a non-numeric string
    """
    if _is_single_id(ids):
        return [int(ids)]
    return list(ids)


def _is_uid(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class OdooClient:
    """XML-RPC client for Odoo models.

    Provides:
    - Permission and field introspection
    - Create / update / delete
    - Read by id and domain search

    Every call authenticates first; the uid is never cached.

    Usage:
        client = OdooClient("https://erp.example.com", "admin", "secret", "prod")
        partner_id = client.create("res.partner", {"name": "Acme"})
        partner = client.find_by_ids("res.partner", partner_id)
    """

    def __init__(
        self,
        server_uri: str,
        username: str,
        password: str,
        database: str,
        proxy_factory: Optional[ProxyFactory] = None,
    ):
        """Initialize client.

        Args:
            server_uri: Base URL of the Odoo server
            username: Odoo login
            password: Password or API key
            database: Odoo database name
            proxy_factory: Callable building a proxy from an endpoint URL
                (defaults to xmlrpc.client.ServerProxy)
        """
        self.config = OdooConnectionConfig(
            server_uri=server_uri,
            username=username,
            password=password,
            database=database,
        )
        self._transport = OdooTransportPool(self.config, proxy_factory)

    @classmethod
    def from_config(
        cls,
        config: OdooConnectionConfig,
        proxy_factory: Optional[ProxyFactory] = None,
    ) -> "OdooClient":
        """Create a client from an OdooConnectionConfig."""
        return cls(
            config.server_uri,
            config.username,
            config.password,
            config.database,
            proxy_factory=proxy_factory,
        )

    def close(self) -> None:
        """Drop the cached transport handles."""
        self._transport.close()

    def __enter__(self) -> "OdooClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # =========================================================================
    # Request pipeline
    # =========================================================================

    def _authenticate(self) -> int:
        """Get the uid used to perform operations on models.

        Raises:
            OdooAuthenticationError: The server did not return a numeric uid
            OdooRemoteCallError: The authentication call itself failed
        """
        cfg = self.config
        with with_correlation(database=cfg.database, endpoint="common"):
            try:
                uid = self._transport.common().authenticate(
                    cfg.database, cfg.username, cfg.password, {}
                )
            except xmlrpc.client.Fault as exc:
                raise classify_fault(exc.faultString, exc.faultCode) from exc
            except TRANSPORT_ERRORS as exc:
                raise OdooRemoteCallError(f"Authentication request failed: {exc}") from exc

            if not _is_uid(uid):
                logger.error(
                    f"Authentication rejected for user {cfg.username}",
                    extra_fields={"result_type": type(uid).__name__},
                )
                raise OdooAuthenticationError(
                    "Authentication failure. Please check Odoo Credentials"
                )
        return uid

    def _process_result(self, result: Any) -> Any:
        """Raise if the result carries a fault, otherwise return it unchanged."""
        fault = OdooFault.from_result(result)
        if fault is not None:
            logger.warning(f"Fault in response: {fault.fault_string}")
            raise classify_fault(fault.fault_string, fault.code)
        return result

    def _execute(
        self,
        model_name: str,
        operation: str,
        options: List[Any],
        extra_options: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Execute an operation on a model and return the result.

        Args:
            model_name: Model's name (e.g. "res.partner")
            operation: ORM method to call
            options: Positional arguments for the method
            extra_options: Keyword arguments for the method

        Raises:
            OdooAuthenticationError: Authentication failed
            OdooModelNotFoundError: Record does not exist
            OdooRemoteCallError: Other faults
        """
        operation = operation.value if isinstance(operation, OdooOperation) else operation
        cfg = self.config
        proxy = self._transport.object()
        uid = self._authenticate()

        with with_correlation(
            database=cfg.database,
            model_name=model_name,
            operation=operation,
            endpoint="object",
            uid=uid,
        ):
            logger.debug(f"Dispatching {operation} on {model_name}")
            try:
                result = proxy.execute_kw(
                    cfg.database,
                    uid,
                    cfg.password,
                    model_name,
                    operation,
                    options,
                    extra_options or {},
                )
            except xmlrpc.client.Fault as exc:
                logger.warning(f"Fault {exc.faultCode}: {exc.faultString}")
                raise classify_fault(exc.faultString, exc.faultCode) from exc
            except xmlrpc.client.ProtocolError as exc:
                logger.warning(f"Protocol error {exc.errcode}: {exc.errmsg}")
                raise OdooRemoteCallError(exc.errmsg, exc.errcode) from exc
            except TRANSPORT_ERRORS as exc:
                logger.warning(f"Request failed with {type(exc).__name__}: {exc}")
                raise OdooRemoteCallError(str(exc)) from exc

            return self._process_result(result)

    # =========================================================================
    # Model operations
    # =========================================================================

    def check_permissions(self, model_name: str, operation: Union[OdooOperation, str]) -> bool:
        """Check whether the user may perform an operation on the model.

        Args:
            model_name: Model's name
            operation: read, write, create or unlink
        """
        if isinstance(operation, OdooOperation):
            operation = operation.value
        return self._execute(model_name, CHECK_ACCESS_RIGHTS, [operation])

    def get_fields(self, model_name: str) -> Dict[str, Dict[str, Any]]:
        """Get the fields of a model with their label, help and type."""
        return self._execute(
            model_name, FIELDS_GET, [], {"attributes": list(FIELD_ATTRIBUTES)}
        )

    def create(self, model_name: str, data: Dict[str, Any]) -> int:
        """Create a record and return its id."""
        return self._execute(model_name, OdooOperation.CREATE, [data])

    def update(self, model_name: str, ids: RecordIds, data: Dict[str, Any]) -> Any:
        """Update one or several records with the given values.

        Args:
            model_name: Model's name
            ids: A single id or an iterable of ids
            data: Values to write

        Raises:
            ValueError: A single id is a non-numeric string
        """
        return self._execute(model_name, OdooOperation.WRITE, [_normalize_ids(ids), data])

    def delete(self, model_name: str, ids: RecordIds) -> Any:
        """Delete one or several records."""
        return self._execute(model_name, OdooOperation.UNLINK, [_normalize_ids(ids)])

    def find_by_ids(
        self,
        model_name: str,
        ids: RecordIds,
        fields: Optional[List[str]] = None,
    ) -> Union[Dict[str, Any], List[Dict[str, Any]], None]:
        """Read records by id.

        Args:
            model_name: Model's name
            ids: A single id or an iterable of ids (list, tuple, set, ...)
            fields: Fields to return; all fields when empty

        Returns:
            The record (or None) for a single id, otherwise a list of records.
            Missing ids are left out of the list by the server.
        """
        return_single = _is_single_id(ids)

        result = self._execute(
            model_name,
            OdooOperation.READ,
            [_normalize_ids(ids)],
            {"fields": list(fields or [])},
        )
        if return_single:
            return result[0] if result else None
        return result

    def search(
        self,
        model_name: str,
        query: List[Any],
        fields: Optional[List[str]] = None,
        limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> List[Dict[str, Any]]:
        """Search records matching a domain.

        Args:
            model_name: Model's name
            query: Domain, like [["name", "=", "Acme"], ["is_company", "=", True]]
            fields: Fields to return; all fields when empty
            limit: Maximum number of records (default 1000)
        """
        return self._execute(
            model_name,
            OdooOperation.SEARCH_READ,
            [query],
            {"fields": list(fields or []), "limit": limit},
        )
