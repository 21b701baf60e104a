"""Couche infrastructure : passerelle HTTP, client de catalogue, CLI."""
