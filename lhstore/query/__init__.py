from .query_service import IndexQueryService, QueryResult, parse_key

__all__ = ["IndexQueryService", "QueryResult", "parse_key"]
