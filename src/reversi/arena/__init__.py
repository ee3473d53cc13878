"""
Arena module for running matches between computer difficulty tiers.
"""
from .arena import Arena, TierPlayer, ELORatingSystem

__all__ = ['Arena', 'TierPlayer', 'ELORatingSystem']
