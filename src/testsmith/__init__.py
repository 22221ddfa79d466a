"""testsmith: AI-generated, self-repairing E2E tests for several browser frameworks."""

__version__ = "0.1.0"
