"""
Utilitaires partages pour les commandes CLI de Showsync.

Ce module fournit :
- console : instance Rich Console partagee
- with_container : decorateur injectant un container initialise
"""

from functools import wraps

from rich.console import Console

from showsync.container import Container, register_event_handlers

console = Console()


def with_container(requires_db: bool = True):
    """
    Decorateur qui injecte un container initialise en premier argument.

    Les handlers d'evenements sont abonnes au bus, et le client TVDB est
    ferme a la sortie.

    Args:
        requires_db: Si True (defaut), initialise la base de donnees.

    Usage:
        @with_container()
        async def my_command(container, ...):
            controller = container.refresh_controller()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            if requires_db:
                container.database.init()
            register_event_handlers(container)
            try:
                return await func(container, *args, **kwargs)
            finally:
                await container.tvdb_client().close()
        return wrapper
    return decorator
