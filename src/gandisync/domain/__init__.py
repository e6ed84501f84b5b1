"""Core of gandisync: records, identity, validation, errors and reconciliation."""
