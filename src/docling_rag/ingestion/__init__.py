"""
Ingestion — document loading, chunking, and embedding.

This module turns raw document text into overlapping, position-tagged
chunks and the vectors that represent them.
"""
