"""InfluenceFlow authentication and user-session backend."""

__version__ = "0.1.0"
