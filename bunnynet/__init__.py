"""Client for the Bunny.net CDN API: URL purging, DNS zones and pull zones."""

__version__ = "0.1.0"