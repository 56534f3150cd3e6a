"""Core library: errors, tree types, expression language, configuration."""
