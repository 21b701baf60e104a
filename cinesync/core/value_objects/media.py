"""
Objets valeur pour les contenus du catalogue distant.

Objets immutables representant un type de media, un resume de contenu tel
que renvoye par les recherches, une page de resultats et un genre.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class MediaType(Enum):
    """Type de contenu du catalogue.

    Valeurs:
        MOVIE: Film
        TV: Serie TV
    """

    MOVIE = "movie"
    TV = "tv"

    @property
    def collection(self) -> str:
        """Segment d'URL des endpoints de collection (search, genres, trending)."""
        return "movies" if self is MediaType.MOVIE else "tv"

    @property
    def label(self) -> str:
        return "Film" if self is MediaType.MOVIE else "Serie"

    @classmethod
    def parse(cls, value: "str | MediaType") -> "MediaType":
        """
        Convertit une valeur libre en MediaType.

        Accepte la forme singuliere ("movie"), la forme collection ("movies")
        et les membres eux-memes.

        Raises:
            ValueError: Si la valeur ne correspond a aucun type
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        if normalized in ("movie", "movies"):
            return cls.MOVIE
        if normalized in ("tv", "series", "show", "shows"):
            return cls.TV
        raise ValueError(f"Unknown media type: {value!r}")


def _extract_year(date_value: Optional[str]) -> Optional[int]:
    """Extrait l'annee d'une date YYYY-MM-DD (None si absente ou invalide)."""
    if not date_value or len(date_value) < 4:
        return None
    try:
        return int(date_value[:4])
    except ValueError:
        return None


@dataclass(frozen=True)
class MediaSummary:
    """
    Resume d'un film ou d'une serie dans une liste de resultats.

    Attributs:
        id: Identifiant du contenu chez le fournisseur (chaine)
        media_type: Type de contenu
        title: Titre (``title`` pour un film, ``name`` pour une serie)
        year: Annee de sortie ou de premiere diffusion
        poster_path: Chemin du poster chez le fournisseur
        vote_average: Note moyenne (0-10)
        overview: Synopsis
    """

    id: str
    media_type: MediaType
    title: str
    year: Optional[int] = None
    poster_path: Optional[str] = None
    vote_average: float = 0.0
    overview: Optional[str] = None

    @classmethod
    def from_api(cls, data: dict[str, Any], media_type: MediaType) -> "MediaSummary":
        """Construit un resume depuis un element ``results`` de l'API."""
        if media_type is MediaType.MOVIE:
            title = data.get("title") or data.get("name") or ""
            date_value = data.get("release_date") or data.get("first_air_date")
        else:
            title = data.get("name") or data.get("title") or ""
            date_value = data.get("first_air_date") or data.get("release_date")

        return cls(
            id=str(data["id"]),
            media_type=media_type,
            title=title or "Unknown Title",
            year=_extract_year(date_value),
            poster_path=data.get("poster_path") or None,
            vote_average=float(data.get("vote_average") or 0.0),
            overview=data.get("overview") or None,
        )


@dataclass(frozen=True)
class SearchPage:
    """
    Page de resultats renvoyee par un endpoint pagine du catalogue.

    Attributs:
        page: Numero de la page (1-indexe)
        results: Resumes des contenus de la page
        total_pages: Nombre total de pages annonce par le service
        total_results: Nombre total de resultats
    """

    page: int
    results: tuple[MediaSummary, ...] = ()
    total_pages: int = 0
    total_results: int = 0

    @classmethod
    def from_api(cls, data: dict[str, Any], media_type: MediaType) -> "SearchPage":
        results = tuple(
            MediaSummary.from_api(item, media_type)
            for item in (data.get("results") or [])
        )
        return cls(
            page=int(data.get("page") or 1),
            results=results,
            total_pages=int(data.get("total_pages") or 0),
            total_results=int(data.get("total_results") or 0),
        )


@dataclass(frozen=True)
class Genre:
    """Genre du catalogue (identifiant fournisseur + nom)."""

    id: int
    name: str


@dataclass(frozen=True)
class Suggestion:
    """
    Suggestion affichee sous le champ de recherche.

    Purement presentationnelle, jamais persistee.
    """

    title: str
    year: Optional[int]
    media_type: MediaType
    id: str

    @classmethod
    def from_summary(cls, summary: MediaSummary) -> "Suggestion":
        return cls(
            title=summary.title,
            year=summary.year,
            media_type=summary.media_type,
            id=summary.id,
        )


@dataclass(frozen=True)
class DetailsView:
    """
    Contenu du panneau de details d'un film ou d'une serie.

    Attributs:
        media_type: Type de contenu
        details: Payload brut des details
        trailers: Bandes-annonces (vide si indisponibles)
        providers: Plateformes de diffusion (None si indisponibles)
        in_watchlist: Appartenance a la watchlist (None si inconnue)
    """

    media_type: MediaType
    details: dict[str, Any]
    trailers: list[dict[str, Any]] = field(default_factory=list)
    providers: Optional[dict[str, Any]] = None
    in_watchlist: Optional[bool] = None

    @property
    def title(self) -> str:
        return self.details.get("title") or self.details.get("name") or "Unknown Title"
