"""graph-risk: layered layout and risk classification for code graphs."""

__version__ = "0.1.0"
