"""Loading error taxonomies from configuration files."""

from .loader import CausesLoader, load_causes, resolve_env_vars

__all__ = [
    "CausesLoader",
    "load_causes",
    "resolve_env_vars",
]
