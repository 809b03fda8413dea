"""
Fonctions utilitaires partagees dans le projet Showsync.

Ce module centralise les fonctions reutilisees a travers le codebase :
- strip_invisible_chars : suppression des caracteres Unicode invisibles
- normalize_accents : suppression des diacritiques pour comparaison
- normalize_title : forme normalisee d'un titre (clean_title)
"""

import re
import unicodedata

# Mots de liaison retires du titre normalise, puis tout caractere non alphanumerique
_NORMALIZE_REGEX = re.compile(r"((^|\W)(a|an|the|and|or|of)($|\W))|\W|_", re.IGNORECASE)


def strip_invisible_chars(text: str) -> str:
    """
    Retire les caractères Unicode invisibles d'une chaîne.

    Supprime les caractères de contrôle et les marques directionnelles
    qui peuvent provenir des APIs (LRM, RLM, BOM, etc.).
    """
    return "".join(char for char in text if unicodedata.category(char) not in ("Cf", "Cc"))


def normalize_accents(text: str) -> str:
    """
    Supprime les accents d'une chaine pour une comparaison insensible aux accents.

    Utilise la decomposition NFD puis filtre les caracteres diacritiques (Mn).
    Ex: "Les Évadés" -> "Les Evades"
    """
    normalized = unicodedata.normalize("NFD", text)
    return "".join(char for char in normalized if unicodedata.category(char) != "Mn")


def normalize_title(title: str) -> str:
    """
    Calcule la forme normalisee d'un titre de serie.

    Retire les caracteres invisibles, les accents, les mots de liaison
    isoles (a, an, the, and, or, of) et toute ponctuation, puis passe
    en minuscules.

    Ex: "The Office (US)" -> "officeus"
    """
    if not title:
        return ""
    cleaned = normalize_accents(strip_invisible_chars(title))
    return _NORMALIZE_REGEX.sub("", cleaned).lower()
