from .rule_search import RuleSearchEngine, build_search_url, split_form_request

__all__ = ["RuleSearchEngine", "build_search_url", "split_form_request"]
