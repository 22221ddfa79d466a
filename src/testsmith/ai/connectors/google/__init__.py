from .connector import GoogleConnector

__all__ = ["GoogleConnector"]
