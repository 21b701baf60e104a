"""
CineSync - Client de decouverte de films et series avec watchlist synchronisee.

Ce package fournit la couche de synchronisation cote client d'un service de
catalogue distant : recherche incrementale avec suggestions, navigation par
genre, panneau de details et watchlist personnelle.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, objets valeur, ports, erreurs)
- services/ : Couche application (controleurs d'etat, pagination)
- adapters/ : Couche infrastructure (passerelle HTTP, CLI Rich/Typer)
"""

__version__ = "0.1.0"
