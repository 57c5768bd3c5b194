"""Command line interface for travelrule."""
