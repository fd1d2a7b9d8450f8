"""Command-line front end for the cryptokat harness."""
