"""CropAdvisor — weather-driven crop advisory engine and API."""

__version__ = "0.1.0"
