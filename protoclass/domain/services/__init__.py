"""Domain services: matching, detection, traversal and diagrams."""
