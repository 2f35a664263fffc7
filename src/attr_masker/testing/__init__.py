"""Testing helpers – fakes for masking tests."""
