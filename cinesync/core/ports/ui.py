"""
Interfaces ports vers les collaborateurs de rendu.

Les composants ne touchent jamais directement l'affichage : ils recoivent
ces ports par injection (notifications transitoires, indicateur de
chargement, boutons de watchlist, zone de resultats).
"""

from abc import ABC, abstractmethod
from enum import Enum

from cinesync.core.value_objects import ResultReady, Suggestion


class NotificationLevel(Enum):
    """Niveau d'une notification transitoire (toast)."""

    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


class INotifier(ABC):
    """Affiche des notifications transitoires visibles par l'utilisateur."""

    @abstractmethod
    def notify(self, message: str, level: NotificationLevel = NotificationLevel.INFO) -> None:
        ...

    def success(self, message: str) -> None:
        self.notify(message, NotificationLevel.SUCCESS)

    def error(self, message: str) -> None:
        self.notify(message, NotificationLevel.ERROR)


class ILoadingIndicator(ABC):
    """Indicateur de chargement global du processus."""

    @abstractmethod
    def show(self) -> None:
        ...

    @abstractmethod
    def hide(self) -> None:
        ...


class IToggleControl(ABC):
    """
    Bouton de watchlist rendu pour une cle (id, media_type).

    Desactive pendant un toggle en cours, refletant l'appartenance sinon.
    """

    @abstractmethod
    def set_enabled(self, enabled: bool) -> None:
        ...

    @abstractmethod
    def set_in_watchlist(self, in_watchlist: bool) -> None:
        ...


class IResultSink(ABC):
    """Zone de rendu des resultats et des suggestions."""

    @abstractmethod
    def show_results(self, event: ResultReady) -> None:
        """Affiche un jeu de resultats (reel, vide ou de repli)."""
        ...

    @abstractmethod
    def show_suggestions(self, suggestions: list[Suggestion]) -> None:
        ...

    @abstractmethod
    def clear_results(self) -> None:
        ...

    @abstractmethod
    def clear_suggestions(self) -> None:
        ...
