"""XML-RPC transport handles for the Odoo connector.

Each OdooClient owns one OdooTransportPool. The pool lazily creates a proxy the
first time an endpoint is used and reuses it afterwards. Proxies are keyed by
endpoint path, so "common" and "object" never replace each other.

Not thread-safe: use one client per thread or serialize access externally.
"""

import xmlrpc.client
from typing import Any, Callable, Dict, Optional

from connectors.odoo.odoo_models import OdooConnectionConfig
from connectors.odoo.odoo_operations import COMMON_ENDPOINT, OBJECT_ENDPOINT
from core.observability.logging import get_logger

logger = get_logger(__name__)

ProxyFactory = Callable[[str], Any]


def default_proxy_factory(url: str) -> xmlrpc.client.ServerProxy:
    """Create a standard XML-RPC proxy for ``url``."""
    return xmlrpc.client.ServerProxy(url, encoding="utf-8", allow_none=True)


class OdooTransportPool:
    """Per-client cache of XML-RPC proxies.

    Usage:
        pool = OdooTransportPool(config)
        uid = pool.common().authenticate(db, login, password, {})
        pool.object().execute_kw(...)
        pool.close()
    """

    def __init__(
        self,
        config: OdooConnectionConfig,
        proxy_factory: Optional[ProxyFactory] = None,
    ):
        self.config = config
        self._proxy_factory = proxy_factory or default_proxy_factory
        self._proxies: Dict[str, Any] = {}

    def get(self, endpoint: str) -> Any:
        """Get the proxy for an endpoint, creating it on first use."""
        url = self.config.endpoint_url(endpoint)
        proxy = self._proxies.get(url)
        if proxy is None:
            logger.debug(f"Opening XML-RPC proxy for {url}")
            proxy = self._proxy_factory(url)
            self._proxies[url] = proxy
        return proxy

    def common(self) -> Any:
        """Proxy for the authentication endpoint."""
        return self.get(COMMON_ENDPOINT)

    def object(self) -> Any:
        """Proxy for the model operations endpoint."""
        return self.get(OBJECT_ENDPOINT)

    @property
    def open_endpoints(self) -> list:
        """URLs of the proxies created so far."""
        return list(self._proxies)

    def close(self) -> None:
        """Close and forget every cached proxy."""
        for url, proxy in self._proxies.items():
            if isinstance(proxy, xmlrpc.client.ServerProxy):
                # ServerProxy exposes its close hook through __call__
                proxy("close")()
            logger.debug(f"Closed XML-RPC proxy for {url}")
        self._proxies.clear()
