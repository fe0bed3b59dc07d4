"""Developer tooling entry points."""
