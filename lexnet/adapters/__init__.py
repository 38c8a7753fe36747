"""Optional backends and converters (networkx, NLTK WordNet)."""
