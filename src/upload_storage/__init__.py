"""
Upload storage for MongoDB GridFS.

Contains the storage adapter uploaders use to persist files in GridFS,
its pydantic settings, and a small CLI for inspecting stored files.
"""
