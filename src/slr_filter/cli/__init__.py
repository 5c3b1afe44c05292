"""Command line interface for slr-filter (`slrf`)."""
