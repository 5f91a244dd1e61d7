"""Core — models, export pipeline, persistence, use cases."""
