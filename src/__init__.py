"""answerfinder: tiered question/answer matching over a local Q&A collection."""

from answerfinder.version import __version__

__all__ = ["__version__"]
