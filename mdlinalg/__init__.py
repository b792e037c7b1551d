"""Builder-style matrix multiplication, QR and SVD over NumPy arrays."""

__version__ = "0.1.0"