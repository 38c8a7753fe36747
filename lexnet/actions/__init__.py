from .neighbours import ExtractionSummary, NeighboursAction

__all__ = ["ExtractionSummary", "NeighboursAction"]
