"""Palm mail client core package."""

from . import constants, domain, errors, infra, paths, services

__all__ = [
    "constants",
    "domain",
    "errors",
    "infra",
    "paths",
    "services",
]
