"""
Backend package for the Ruby Emotes service.

This package provides a FastAPI application that manages emote images and the
site's ad link on top of a document store and an object store, with
Firebase, SQL/S3-compatible and in-memory implementations of each.
"""
