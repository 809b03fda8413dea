"""
Showsync - Rafraichissement des metadonnees d'une bibliotheque de series TV.

Ce package reconcilie les fiches TVDB (serie + liste d'episodes) avec la
bibliotheque locale, en preservant les liens vers les fichiers et les
drapeaux "ignore" poses par l'utilisateur.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entites, evenements, ports)
- services/ : Couche application (reconciliation, orchestration)
- adapters/ : Couche infrastructure (CLI, client TVDB, bus d'evenements)
- infrastructure/ : Persistance SQLite via SQLModel
"""

__version__ = "0.1.0"
