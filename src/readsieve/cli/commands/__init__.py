"""readsieve CLI subcommands."""
