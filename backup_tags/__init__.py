"""
Tag store for save backups: named, colored tags attached to backups and saves.
"""
__version__ = "0.1.0"
