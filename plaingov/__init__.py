"""PlainGov — retrieval-first answers about Canadian tax and benefit programs."""

__version__ = "0.1.0"
