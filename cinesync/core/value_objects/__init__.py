"""
Objets valeur immutables du domaine.

Exports :
- MediaType : Type de contenu (MOVIE, TV)
- MediaSummary : Resume d'un contenu dans une liste de resultats
- SearchPage : Page de resultats d'un endpoint pagine
- Genre : Genre du catalogue
- Suggestion : Suggestion de recherche
- DetailsView : Contenu du panneau de details
- PageButton, PageModel, ELLIPSIS : Modele de pagination
- SearchSession, SearchState, ResultStatus, ResultReady : Recherche
"""

from cinesync.core.value_objects.media import (
    DetailsView,
    Genre,
    MediaSummary,
    MediaType,
    SearchPage,
    Suggestion,
)
from cinesync.core.value_objects.pagination import (
    ELLIPSIS,
    ELLIPSIS_LABEL,
    PageButton,
    PageModel,
)
from cinesync.core.value_objects.search import (
    ResultReady,
    ResultStatus,
    SearchSession,
    SearchState,
)

__all__ = [
    "DetailsView",
    "Genre",
    "MediaSummary",
    "MediaType",
    "SearchPage",
    "Suggestion",
    "ELLIPSIS",
    "ELLIPSIS_LABEL",
    "PageButton",
    "PageModel",
    "ResultReady",
    "ResultStatus",
    "SearchSession",
    "SearchState",
]
