"""
Modele de pagination derive, sans etat.

Un PageModel est recalcule a chaque rendu et n'est jamais modifie en place.
"""

from dataclasses import dataclass
from typing import Optional

ELLIPSIS_LABEL = "…"


@dataclass(frozen=True)
class PageButton:
    """
    Element de la barre de pagination.

    Attributs:
        number: Numero de page, ou None pour un marqueur d'ellipse
        current: True si le bouton correspond a la page courante
    """

    number: Optional[int]
    current: bool = False

    @property
    def is_ellipsis(self) -> bool:
        return self.number is None

    @property
    def label(self) -> str:
        return ELLIPSIS_LABEL if self.number is None else str(self.number)


ELLIPSIS = PageButton(number=None)


@dataclass(frozen=True)
class PageModel:
    """
    Barre de pagination bornee et compressee par ellipses.

    Attributs:
        current_page: Page courante
        total_pages: Nombre total de pages (deja borne par l'appelant)
        buttons: Sequence ordonnee de numeros de page et d'ellipses
        has_prev: Une page precedente existe
        has_next: Une page suivante existe
    """

    current_page: int
    total_pages: int
    buttons: tuple[PageButton, ...]
    has_prev: bool
    has_next: bool

    @property
    def labels(self) -> list[str]:
        """Libelles des boutons dans l'ordre d'affichage."""
        return [button.label for button in self.buttons]

    @property
    def prev_page(self) -> Optional[int]:
        return self.current_page - 1 if self.has_prev else None

    @property
    def next_page(self) -> Optional[int]:
        return self.current_page + 1 if self.has_next else None
