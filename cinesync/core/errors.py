"""
Taxonomie des erreurs de la couche client.

- GatewayError : base des echecs reels d'un appel distant
  - NetworkError : echec de transport, aucune reponse recue
  - HttpStatusError : reponse non-2xx, porte le code HTTP
- RequestCancelled : operation remplacee par une plus recente. N'herite PAS
  de GatewayError : un ``except GatewayError`` ne l'intercepte jamais.
- ValidationError : donnee hors domaine (ex: note hors 0-10)
"""

from typing import Optional


class GatewayError(Exception):
    """Echec d'un appel vers le service de catalogue distant."""


class NetworkError(GatewayError):
    """
    Echec de transport (DNS, connexion refusee, timeout...).

    Attributes:
        url: URL de la requete en echec
    """

    def __init__(self, url: str, message: str = "") -> None:
        self.url = url
        super().__init__(message or f"Network failure for {url}")


class HttpStatusError(GatewayError):
    """
    Reponse HTTP hors de la plage 2xx.

    Attributes:
        status_code: Code HTTP retourne par le service
        url: URL de la requete en echec
    """

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"HTTP error {status_code} for {url}")


class RequestCancelled(Exception):
    """
    Requete annulee via son jeton d'annulation.

    Ni un succes ni un echec : pas de notification, pas de rendu de repli.
    """

    def __init__(self, reason: Optional[str] = None) -> None:
        self.reason = reason
        super().__init__(reason or "Request cancelled")


class ValidationError(ValueError):
    """Valeur hors du domaine attendu."""
