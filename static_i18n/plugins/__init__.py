"""Build plugins run between bundling and writing the output."""
