"""Core domain logic: exception hierarchy and the diagram merge pipeline."""
