"""Station Ranker: nearest fuel-price stations for a given location."""

__version__ = "0.1.0"
