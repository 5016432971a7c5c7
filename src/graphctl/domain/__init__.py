"""Domain layer — graph types, counters, metadata records and errors.

This layer depends only on stdlib.
It must never import from engine, services, commands, or config.
"""
