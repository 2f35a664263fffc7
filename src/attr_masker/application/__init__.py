"""Application layer – attribute masking and bulk masking runs."""
