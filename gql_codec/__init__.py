"""Build GraphQL selections and the decoders for their responses together."""

__version__ = "0.1.0"
