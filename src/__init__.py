"""annosync: synchronise PDF annotations across document trees by content hash."""

from annosync.version import __version__

__all__ = ["__version__"]
