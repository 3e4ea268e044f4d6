"""bytefmt — tailles en octets rendues lisibles dans un flux de lignes."""

__version__ = "0.1.0"
