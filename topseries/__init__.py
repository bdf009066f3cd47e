"""TopSeries: trending TV shows enriched with trailers and streaming providers."""

__version__ = "1.0.0"
