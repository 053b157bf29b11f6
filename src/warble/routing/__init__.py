"""Routing: the route tree that gets localized and the live snapshot of it.

Route nodes are mutable (translation rewrites them in place); snapshots of
the active navigation state are frozen.
"""
