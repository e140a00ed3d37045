"""KubeDeck - terminal dashboard for the pods of one Kubernetes namespace."""

__version__ = "0.1.0"
