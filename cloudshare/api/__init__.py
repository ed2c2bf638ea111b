"""HTTP layer: server-rendered routes and the versioned JSON API."""
