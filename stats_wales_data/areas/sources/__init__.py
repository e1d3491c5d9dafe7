"""Parsers for the supported source formats.

Each module exposes ``populate(store, stream, columns, filters)``, which
reads one source and merges what it finds into an ``AreaStore``.
"""
