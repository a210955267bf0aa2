"""Service backends for the Registry Operator."""
