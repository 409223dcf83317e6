"""Infrastructure: configuration, logging, database, storage and external clients."""
