"""
Interfaces ports (contrats abstraits) de la couche domaine.

Exports :
- ICatalogClient : Service de catalogue distant
- INotifier, NotificationLevel : Notifications transitoires
- ILoadingIndicator : Indicateur de chargement global
- IToggleControl : Bouton de watchlist rendu
- IResultSink : Zone de rendu des resultats et suggestions
"""

from cinesync.core.ports.catalog import ICatalogClient
from cinesync.core.ports.ui import (
    ILoadingIndicator,
    INotifier,
    IResultSink,
    IToggleControl,
    NotificationLevel,
)

__all__ = [
    "ICatalogClient",
    "ILoadingIndicator",
    "INotifier",
    "IResultSink",
    "IToggleControl",
    "NotificationLevel",
]
