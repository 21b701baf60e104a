"""
Objets valeur des sessions de recherche et des evenements de resultat.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from cinesync.core.value_objects.media import MediaSummary, MediaType
from cinesync.core.value_objects.pagination import PageModel


class SearchState(Enum):
    """Etat d'un canal de requete (recherche ou suggestions)."""

    IDLE = "idle"
    PENDING = "pending"
    SETTLED = "settled"
    CANCELLED = "cancelled"
    FAILED = "failed"


class ResultStatus(Enum):
    """Nature d'un jeu de resultats rendu.

    Valeurs:
        RESULTS: Le service a renvoye des resultats
        EMPTY: Le service a repondu, sans aucune correspondance
        UNAVAILABLE: Le service est injoignable, contenu de repli affiche
    """

    RESULTS = "results"
    EMPTY = "empty"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class SearchSession:
    """
    Session de recherche ephemere, une par chaine de requete.

    Attributs:
        query: Texte recherche
        requested_at: Jeton de sequence monotone attribue a l'emission
        media_type: Type de contenu recherche
        page: Page demandee
    """

    query: str
    requested_at: int
    media_type: MediaType
    page: int = 1


@dataclass(frozen=True)
class ResultReady:
    """
    Evenement "resultats prets" emis vers le collaborateur de rendu.

    Attributs:
        results: Contenus a afficher
        media_type: Type de contenu affiche
        page_model: Barre de pagination derivee
        status: Nature du jeu de resultats (resultats, vide, indisponible)
        total_results: Nombre total de resultats annonce
        session: Session de recherche a l'origine (None pour la navigation par genre)
        title: Titre de la vue (ex: '"inception"' ou nom du genre)
    """

    results: tuple[MediaSummary, ...]
    media_type: MediaType
    page_model: PageModel
    status: ResultStatus = ResultStatus.RESULTS
    total_results: int = 0
    session: Optional[SearchSession] = None
    title: str = ""
