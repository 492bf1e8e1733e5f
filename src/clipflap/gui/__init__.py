"""Qt front-end for clipflap."""
