"""FastAPI driver serving sessions over HTTP and WebSocket."""
