"""Find, size and clean up build ``target`` directories."""
