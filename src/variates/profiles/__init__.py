"""YAML-defined sampler profiles for synthetic numeric data."""

from .profile_loader import Profile, ProfileLoader

__all__ = [
    "Profile",
    "ProfileLoader",
]
