"""Club treasury API: members, dues, campaigns, expenses and monthly closures."""
