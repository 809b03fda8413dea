"""Utilitaires partages."""
