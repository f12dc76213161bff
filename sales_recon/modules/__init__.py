"""Business modules: ingestion, reference data, sales rules and audit trail."""
