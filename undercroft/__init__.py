"""
project: Undercroft
module: __init__.py

Seeded procedural dungeon generator. The generation pipeline lives in
``undercroft.dungeon``; ``undercroft.logging_utils`` holds the structured logger.
"""
