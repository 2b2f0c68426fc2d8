"""Configuration utilities for the hierarchy viewer."""

from .policies import DisplayPolicy, HierarchyPolicy, Policies, load_policies
from .settings import PathsConfig, Settings, get_settings

__all__ = [
    "Settings",
    "PathsConfig",
    "get_settings",
    "Policies",
    "load_policies",
    "HierarchyPolicy",
    "DisplayPolicy",
]
