"""Adaptateur CLI : commandes Typer et rendu Rich."""
