"""VaultDesk helpdesk and credential vault API."""
