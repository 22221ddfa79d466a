from .connector import AnthropicConnector

__all__ = ["AnthropicConnector"]
