"""Service layer: presentation front-ends built on the client."""
