"""Domain layer: share-link entities, policy and error taxonomy."""
