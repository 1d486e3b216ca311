"""Versioned migration files for the Pipe settings schema.

Each module in this package must expose a single ``MIGRATION`` constant of
type :class:`~PipeUpgrade.storage.migration.Migration`.  Modules are
discovered and sorted automatically by
:func:`~PipeUpgrade.storage.migration._load_migrations`; file names must
follow the ``vNNN_<description>.py`` convention.
"""
