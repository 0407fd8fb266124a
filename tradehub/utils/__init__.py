"""
Error types, response serialization and FastAPI dependencies.
"""
