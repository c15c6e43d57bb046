"""
Database layer for upload storage.

Contains the MongoDB GridFS adapter that stores large objects by namespace and path.
"""
