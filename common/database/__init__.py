"""
Database module - async MongoDB via Motor.

Usage:
    from common.database import MongoDB

    db = MongoDB()
    await db.connect(uri, database_name, indexes)
    collection = db.db["checkIns"]
"""

from common.database.mongodb import MongoDB

__all__ = ["MongoDB"]
