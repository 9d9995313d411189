"""Migration - upgrades legacy ticket documents."""

from ticketr.migration.migrator import Migrator

__all__ = ["Migrator"]
