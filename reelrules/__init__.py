"""reelrules - smart rule engine for channel lineups, collections and virtual channels."""

from reelrules.__version__ import __version__

__all__ = ["__version__"]
