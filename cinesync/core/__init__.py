"""Couche domaine : entites, objets valeur, ports et erreurs."""
