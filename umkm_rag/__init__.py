"""UMKM RAG service: question answering over the UMKM dataset."""
