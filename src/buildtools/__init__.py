"""Build-tool analyzers producing dependency graphs from project layouts."""
