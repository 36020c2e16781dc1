from chat_admin.query.pagination import PageInfo, PageRequest, PaginatedQuery, fetch_page
from chat_admin.query.predicate import Clause, Predicate, PredicateBuilder

__all__ = [
    "Clause",
    "PageInfo",
    "PageRequest",
    "PaginatedQuery",
    "Predicate",
    "PredicateBuilder",
    "fetch_page",
]
