"""mailroom: index and search your mail from the command line."""
