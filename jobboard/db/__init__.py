"""
Database module - MongoDB connection handle.
"""
from jobboard.db.mongodb import COLLECTIONS, MongoConnection, get_mongo

__all__ = [
    "COLLECTIONS",
    "MongoConnection",
    "get_mongo",
]
