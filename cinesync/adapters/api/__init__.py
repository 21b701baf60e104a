"""
Adaptateurs HTTP vers le service de catalogue.

Exports :
- RequestGateway : Passerelle des appels (call / silent_call)
- CancellationToken : Jeton d'annulation cooperatif
- CatalogClient : Client type de l'API v1
"""

from cinesync.core.cancellation import CancellationToken
from cinesync.adapters.api.catalog_client import CatalogClient
from cinesync.adapters.api.gateway import REQUEST_FAILED_MESSAGE, RequestGateway

__all__ = [
    "CancellationToken",
    "CatalogClient",
    "REQUEST_FAILED_MESSAGE",
    "RequestGateway",
]
