"""Form action handlers bound to the dashboard's HTML forms."""
