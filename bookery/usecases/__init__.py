"""Use-case layer for the catalog search workflow.

Each module calls ports without performing transport I/O directly and turns
adapter failures into ``UseCaseError`` values.
"""
