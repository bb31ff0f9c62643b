"""Testing – fakes for the backend, token provider and clock."""
