"""gitcollect command-line interface."""
