from .fetcher import HttpxFetcher, build_http_client

__all__ = ["HttpxFetcher", "build_http_client"]
