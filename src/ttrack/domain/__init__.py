"""Domain layer: events, time parsing, and the tracking rules.

This layer depends only on the stdlib.
It must never import from services, infrastructure, commands, or config.
"""
