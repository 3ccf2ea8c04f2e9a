"""Command line scripts for importing the Dog CEO catalog."""
