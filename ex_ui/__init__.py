"""CLI facade for explorer-matrix-lib."""
