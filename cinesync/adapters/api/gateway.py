"""
Passerelle des appels sortants vers le service de catalogue.

Deux modes d'appel :
- call : affiche l'indicateur de chargement pendant l'appel et notifie
  l'utilisateur de tout echec non annule, puis relance l'erreur
- silent_call : identique mais sans indicateur ni notification, pour le
  contenu decoratif (bandes-annonces, plateformes) ou l'appelant degrade
  lui-meme vers un etat vide

La passerelle ne relance jamais automatiquement une requete : la politique
de reessai appartient a l'appelant.

Usage:
    gateway = RequestGateway("http://localhost:8080", notifier, loading)
    data = await gateway.call("/api/v1/watchlist")
    await gateway.close()
"""

from contextlib import contextmanager
from typing import Any, Iterator, Optional

import httpx
from loguru import logger

from cinesync.core.cancellation import CancellationToken
from cinesync.core.errors import GatewayError, HttpStatusError, NetworkError
from cinesync.core.ports import ILoadingIndicator, INotifier

REQUEST_FAILED_MESSAGE = "La requete a echoue. Veuillez reessayer."


class RequestGateway:
    """
    Enveloppe httpx des appels JSON vers le catalogue.

    Attributes:
        base_url: URL de base du service (ex: http://localhost:8080)

    Example:
        gateway = RequestGateway(base_url, notifier=notifier, loading_indicator=loading)
        token = gateway.new_token()
        page = await gateway.call("/api/v1/search/movies", params={"q": "alien"}, token=token)
    """

    def __init__(
        self,
        base_url: str,
        notifier: INotifier,
        loading_indicator: ILoadingIndicator,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Initialise la passerelle.

        Args:
            base_url: URL de base du service de catalogue
            notifier: Sink des notifications utilisateur
            loading_indicator: Indicateur de chargement global
            timeout: Timeout des requetes en secondes
            client: Client httpx preconfigure (optionnel, cree a la demande sinon)
        """
        self.base_url = base_url.rstrip("/")
        self._notifier = notifier
        self._loading = loading_indicator
        self._timeout = timeout
        self._client = client
        self._active_calls = 0

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "Accept": "application/json",
                    "Content-Type": "application/json",
                },
                timeout=self._timeout,
            )
        return self._client

    @staticmethod
    def new_token() -> CancellationToken:
        """Fabrique un jeton d'annulation pour un appel."""
        return CancellationToken()

    @property
    def active_calls(self) -> int:
        """Nombre d'appels ``call`` en cours (indicateur visible si > 0)."""
        return self._active_calls

    @contextmanager
    def _loading_scope(self) -> Iterator[None]:
        # Indicateur partage par les appels concurrents : affiche au premier,
        # masque au dernier, quel que soit le resultat.
        self._active_calls += 1
        if self._active_calls == 1:
            self._loading.show()
        try:
            yield
        finally:
            self._active_calls -= 1
            if self._active_calls == 0:
                self._loading.hide()

    async def call(
        self,
        endpoint: str,
        method: str = "GET",
        params: Optional[dict[str, Any]] = None,
        json: Optional[Any] = None,
        token: Optional[CancellationToken] = None,
    ) -> Any:
        """
        Execute un appel avec indicateur de chargement et notification d'echec.

        Args:
            endpoint: Chemin relatif (ex: "/api/v1/watchlist")
            method: Methode HTTP
            params: Parametres de requete
            json: Corps JSON
            token: Jeton d'annulation optionnel

        Returns:
            Le JSON decode de la reponse (None si corps vide)

        Raises:
            NetworkError: Echec de transport
            HttpStatusError: Reponse non-2xx
            RequestCancelled: Jeton annule (aucune notification)
        """
        with self._loading_scope():
            try:
                return await self._send(method, endpoint, params, json, token)
            except GatewayError as e:
                logger.warning("Appel catalogue en echec", endpoint=endpoint, error=str(e))
                self._notifier.error(REQUEST_FAILED_MESSAGE)
                raise

    async def silent_call(
        self,
        endpoint: str,
        method: str = "GET",
        params: Optional[dict[str, Any]] = None,
        json: Optional[Any] = None,
        token: Optional[CancellationToken] = None,
    ) -> Any:
        """
        Execute un appel sans indicateur de chargement ni notification.

        Memes erreurs que ``call`` : l'appelant decide de la degradation.
        """
        try:
            return await self._send(method, endpoint, params, json, token)
        except GatewayError as e:
            logger.debug("Appel silencieux en echec", endpoint=endpoint, error=str(e))
            raise

    async def _send(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict[str, Any]],
        json: Optional[Any],
        token: Optional[CancellationToken],
    ) -> Any:
        if token is not None:
            token.raise_if_cancelled()
            return await token.guard(self._perform(method, endpoint, params, json))
        return await self._perform(method, endpoint, params, json)

    async def _perform(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict[str, Any]],
        json: Optional[Any],
    ) -> Any:
        client = self._get_client()
        url = f"{self.base_url}{endpoint}"
        logger.debug("Appel catalogue", method=method, endpoint=endpoint, params=params)

        try:
            response = await client.request(method, endpoint, params=params, json=json)
        except httpx.TransportError as e:
            raise NetworkError(url, str(e) or type(e).__name__) from e

        if not response.is_success:
            raise HttpStatusError(response.status_code, url)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise GatewayError(f"Invalid JSON payload from {url}") from e

    async def close(self) -> None:
        """Ferme le client HTTP (a appeler a la fin)."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
