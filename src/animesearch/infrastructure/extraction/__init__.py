from .engine import extract_episodes, extract_search_results

__all__ = ["extract_episodes", "extract_search_results"]
