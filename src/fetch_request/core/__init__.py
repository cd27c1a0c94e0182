from .request import RequestBuilder

__all__ = ["RequestBuilder"]
