"""Provider-independent model, errors and reconciliation protocols."""
