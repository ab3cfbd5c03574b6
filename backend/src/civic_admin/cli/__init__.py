"""Console and terminal dashboard front-ends."""
