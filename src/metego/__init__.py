"""metego: OpenWeather forecast to console and Pushover."""

__version__ = "0.1.0"
