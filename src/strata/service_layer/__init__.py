"""Service layer: messages, handler registration, the message bus and repositories."""
