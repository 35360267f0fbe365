"""
Serving — FastAPI application for document ingestion and RAG queries.

Build the app with :func:`docling_rag.serving.app.create_app`, injecting
the service instance it should use.
"""
