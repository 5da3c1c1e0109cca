"""
Schema - Wire value types and JSON-schema validated data tables.
"""
