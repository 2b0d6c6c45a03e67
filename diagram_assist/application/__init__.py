"""Application layer: services used by the transport handler."""
