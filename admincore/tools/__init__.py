"""Helpers: language parsing, search conditions, column names, request headers and SQL logging."""