"""
Services Layer
Orchestration over the domain layer used by routes and external callers.
"""
