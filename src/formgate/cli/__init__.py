"""formgate command line interface."""
