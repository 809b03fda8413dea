"""
Couche domaine (core).

Contient les entités métier, les événements et les ports (interfaces abstraites).
Cette couche n'a AUCUNE dépendance vers l'infrastructure (adapters, frameworks, BDD).

Sous-packages :
- entities/ : Entités métier (Series, Season, Episode)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
- events.py : Notifications émises et consommées par le rafraîchissement
"""
