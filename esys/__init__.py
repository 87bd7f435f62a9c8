"""esys — CLI systemu ekspertowego (dopasowanie faktów + agregacja prawdopodobieństw)."""

__version__ = "0.1.0"
