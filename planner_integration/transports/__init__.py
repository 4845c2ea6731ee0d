"""HTTP transports used by the Graph client."""
