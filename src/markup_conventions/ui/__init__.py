"""Console output for the command-line interface."""
