"""Twitter monitoring: event catalog, toggle, account selection and dispatch."""
