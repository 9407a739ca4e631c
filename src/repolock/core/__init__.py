"""Core model and algorithms: references, declarations, lock files,
workspaces, and the dependency resolution engine."""
